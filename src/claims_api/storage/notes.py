from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

from aws_lambda_powertools import Logger, Tracer
from botocore.exceptions import ClientError

from claims_api.ports import NotesRepository

logger = Logger(child=True)
tracer = Tracer()


def _notes_key(claim_id: str) -> str:
    return f"{claim_id}.json"


class S3NotesRepository(NotesRepository):
    """
    One S3 object per claim, `<claim_id>.json`, body `{"notes": [...]}`.

    Saving replaces the object; notes are never merged.
    """

    def __init__(self, s3_client: Any, bucket: str):
        self.s3 = s3_client
        self.bucket = bucket

    @tracer.capture_method
    def get_notes_for_claim(self, claim_id: str) -> List[str]:
        try:
            response = self.s3.get_object(Bucket=self.bucket, Key=_notes_key(claim_id))
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                logger.info(f"No notes stored for claim {claim_id}")
                return []
            raise

        body = response["Body"].read().decode("utf-8")
        if not body:
            return []
        payload = json.loads(body)
        notes = payload.get("notes") if isinstance(payload, dict) else None
        if not isinstance(notes, list):
            logger.warning(f"Notes object for claim {claim_id} has no notes array")
            return []
        return notes

    @tracer.capture_method
    def save_notes_for_claim(self, claim_id: str, notes: List[str]) -> None:
        self.s3.put_object(
            Bucket=self.bucket,
            Key=_notes_key(claim_id),
            Body=json.dumps({"notes": notes}),
            ContentType="application/json",
        )
        logger.info(f"Saved notes for claim {claim_id}")


class MockNotesRepository(NotesRepository):
    """Notes from a JSON fixture mapping claim id to an array of strings."""

    def __init__(self, fixture_path: Path):
        self.fixture_path = Path(fixture_path)

    def get_notes_for_claim(self, claim_id: str) -> List[str]:
        try:
            notes = json.loads(self.fixture_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.exception(f"Failed to read mock notes file {self.fixture_path}")
            return []

        if not isinstance(notes, dict):
            logger.error(f"Mock notes file {self.fixture_path} is not a JSON object")
            return []
        claim_notes = notes.get(claim_id)
        if not isinstance(claim_notes, list):
            if claim_notes is not None:
                logger.error(f"Mock notes for {claim_id} are not a JSON array")
            return []
        return list(claim_notes)

    def save_notes_for_claim(self, claim_id: str, notes: List[str]) -> None:
        logger.info(f"Mock mode: would save {len(notes)} notes for {claim_id}")
