from __future__ import annotations

import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

import boto3
from aws_lambda_powertools import Logger, Tracer

from claims_api.config import Settings
from claims_api.exceptions import ClaimNotFoundError
from claims_api.genai import BedrockSummarizer, MockSummarizer
from claims_api.models import Claim, CreateClaimRequest
from claims_api.ports import ClaimRepository, NotesRepository, SummarizationProvider
from claims_api.storage import (
    DynamoClaimRepository,
    MockClaimRepository,
    MockNotesRepository,
    S3NotesRepository,
)

logger = Logger(child=True)
tracer = Tracer()


def _generate_claim_id() -> str:
    return f"CLM-{int(time.time() * 1000)}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ClaimsService:
    """Fetch, summarize and create use cases over the three adapters. Holds no state."""

    def __init__(
        self,
        claims: ClaimRepository,
        notes: NotesRepository,
        summarizer: SummarizationProvider,
    ):
        self.claims = claims
        self.notes = notes
        self.summarizer = summarizer

    def _require_claim(self, claim_id: str) -> Claim:
        claim = self.claims.get_by_id(claim_id)
        if claim is None:
            raise ClaimNotFoundError(claim_id)
        return claim

    @tracer.capture_method
    def get_claim(self, claim_id: str) -> Dict[str, Any]:
        return self._require_claim(claim_id).to_dict()

    @tracer.capture_method
    def summarize_claim(self, claim_id: str) -> Dict[str, str]:
        claim = self._require_claim(claim_id)
        notes = self.notes.get_notes_for_claim(claim_id)
        return self.summarizer.summarize(claim, notes).to_dict()

    @tracer.capture_method
    def create_claim(self, request: CreateClaimRequest) -> Dict[str, Any]:
        """
        Persists a claim built from the request, each field defaulted independently.

        Notes, when present, are written after the claim as a separate put.
        A failed notes write leaves the claim in place.
        """
        claim = Claim(
            id=request.id or _generate_claim_id(),
            status=request.status or "OPEN",
            policy_number=request.policy_number or "",
            last_updated=request.last_updated or _now_iso(),
            amount=request.amount or 0,
            customer_name=request.customer_name or "",
            adjuster=request.adjuster or "",
        )
        created = self.claims.create(claim)

        if request.notes:
            self.notes.save_notes_for_claim(created.id, request.notes)

        logger.info(f"Created claim {created.id}", extra={"notes_count": len(request.notes)})
        return created.to_dict()


def build_service(settings: Settings) -> ClaimsService:
    """Selects the mock or AWS variant of every adapter from settings.use_mocks."""
    if settings.use_mocks:
        mocks_dir = Path(settings.mocks_dir)
        logger.info(f"Mock mode enabled; reading fixtures from {mocks_dir}")
        return ClaimsService(
            claims=MockClaimRepository(mocks_dir / "claims.json"),
            notes=MockNotesRepository(mocks_dir / "notes.json"),
            summarizer=MockSummarizer(),
        )

    dynamodb = boto3.resource("dynamodb", region_name=settings.region)
    s3_client = boto3.client("s3", region_name=settings.region)
    bedrock = boto3.client("bedrock-runtime", region_name=settings.model_region)
    return ClaimsService(
        claims=DynamoClaimRepository(dynamodb.Table(settings.claims_table_name)),
        notes=S3NotesRepository(s3_client, settings.notes_bucket),
        summarizer=BedrockSummarizer(bedrock, settings.bedrock_model_id),
    )
