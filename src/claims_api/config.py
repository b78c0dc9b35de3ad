from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    region: str
    claims_table_name: str
    notes_bucket: str
    bedrock_model_id: str
    bedrock_region: Optional[str]
    use_mocks: bool
    mocks_dir: str = "mocks"

    @property
    def model_region(self) -> str:
        return self.bedrock_region or self.region


def _get(environ: Mapping[str, str], key: str, default: Optional[str] = None) -> Optional[str]:
    # Empty strings fall back to the default as well
    return environ.get(key) or default


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        region=_get(env, "AWS_REGION", "us-east-1"),
        claims_table_name=_get(env, "CLAIMS_TABLE_NAME", "claims-table"),
        notes_bucket=_get(env, "NOTES_BUCKET", "claim-notes-bucket"),
        bedrock_model_id=_get(env, "BEDROCK_MODEL_ID", "amazon.nova-micro-v1:0"),
        bedrock_region=_get(env, "BEDROCK_REGION"),
        use_mocks=env.get("USE_MOCKS") == "true",
        mocks_dir=_get(env, "MOCKS_DIR", "mocks"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for this execution environment, resolved on first use."""
    return load_settings()
