from __future__ import annotations

from typing import List


class ClaimNotFoundError(Exception):
    def __init__(self, claim_id: str):
        self.claim_id = claim_id
        super().__init__(f"Claim {claim_id} not found")


class ValidationError(ValueError):
    """Raised when a create-claim payload does not match the expected schema."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class UnsupportedInMockModeError(NotImplementedError):
    """Raised on claim writes while read-only mock fixtures back the store."""
