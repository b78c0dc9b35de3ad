"""
Seeds a live environment with the mock fixtures:
mocks/claims.json -> DynamoDB table, mocks/notes.json -> S3 bucket (one object per claim).

Usage:
    python scripts/seed_mock_data.py [--region us-east-1] [--table claims-table] [--bucket claim-notes-bucket]
"""
import argparse
import json
import pathlib
import sys

import boto3

from claims_api.config import load_settings
from claims_api.models import Claim
from claims_api.storage import DynamoClaimRepository, S3NotesRepository

MOCKS_DIR = pathlib.Path(__file__).resolve().parents[1] / "mocks"


def seed_mock_data(region: str, table_name: str, bucket: str) -> None:
    claims = json.loads((MOCKS_DIR / "claims.json").read_text(encoding="utf-8"))
    notes = json.loads((MOCKS_DIR / "notes.json").read_text(encoding="utf-8"))

    claim_repo = DynamoClaimRepository(boto3.resource("dynamodb", region_name=region).Table(table_name))
    notes_repo = S3NotesRepository(boto3.client("s3", region_name=region), bucket)

    print(f"Seeding {len(claims)} claims to {table_name} and {len(notes)} note sets to {bucket} ({region})...")

    for item in claims:
        claim = Claim.from_item(item)
        try:
            claim_repo.create(claim)
            print(f"[SUCCESS] Stored claim {claim.id}")
        except Exception as e:
            print(f"[FAILED] Failed to store claim {claim.id}: {e}")
            sys.exit(1)

    for claim_id, claim_notes in notes.items():
        try:
            notes_repo.save_notes_for_claim(claim_id, claim_notes)
            print(f"[SUCCESS] Stored {len(claim_notes)} notes for {claim_id}")
        except Exception as e:
            print(f"[FAILED] Failed to store notes for {claim_id}: {e}")
            sys.exit(1)


def main() -> None:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Seed DynamoDB and S3 with the mock fixtures")
    parser.add_argument("--region", default=settings.region)
    parser.add_argument("--table", default=settings.claims_table_name)
    parser.add_argument("--bucket", default=settings.notes_bucket)
    args = parser.parse_args()
    seed_mock_data(args.region, args.table, args.bucket)


if __name__ == "__main__":
    main()
