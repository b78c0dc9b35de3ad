from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from aws_lambda_powertools import Logger, Tracer

from claims_api.exceptions import UnsupportedInMockModeError
from claims_api.models import Claim, to_dynamo_compatible
from claims_api.ports import ClaimRepository

logger = Logger(child=True)
tracer = Tracer()


class DynamoClaimRepository(ClaimRepository):
    """
    Claim records in a DynamoDB table keyed by `id`.

    Writes are unconditional puts: the last write for an id wins.
    """

    def __init__(self, table: Any):
        self.table = table

    @tracer.capture_method
    def get_by_id(self, claim_id: str) -> Optional[Claim]:
        response = self.table.get_item(Key={"id": claim_id})
        item = response.get("Item")
        if not item:
            return None
        return Claim.from_item(item)

    @tracer.capture_method
    def create(self, claim: Claim) -> Claim:
        self.table.put_item(Item=to_dynamo_compatible(claim.to_dict()))
        logger.info(f"Stored claim {claim.id}")
        return claim


class MockClaimRepository(ClaimRepository):
    """Read-only claims from a JSON fixture holding an array of claim objects."""

    def __init__(self, fixture_path: Path):
        self.fixture_path = Path(fixture_path)

    def get_by_id(self, claim_id: str) -> Optional[Claim]:
        try:
            claims = json.loads(self.fixture_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.exception(f"Failed to read mock claims file {self.fixture_path}")
            return None

        if not isinstance(claims, list):
            logger.error(f"Mock claims file {self.fixture_path} is not a JSON array")
            return None

        for item in claims:
            if isinstance(item, dict) and item.get("id") == claim_id:
                return Claim.from_item(item)
        return None

    def create(self, claim: Claim) -> Claim:
        raise UnsupportedInMockModeError("Creating claims in mocks is not supported")
