from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from claims_api.models import Claim, ClaimSummary


class ClaimRepository(ABC):
    @abstractmethod
    def get_by_id(self, claim_id: str) -> Optional[Claim]:
        ...

    @abstractmethod
    def create(self, claim: Claim) -> Claim:
        ...


class NotesRepository(ABC):
    @abstractmethod
    def get_notes_for_claim(self, claim_id: str) -> List[str]:
        ...

    @abstractmethod
    def save_notes_for_claim(self, claim_id: str, notes: List[str]) -> None:
        """Replaces the whole note collection for the claim."""


class SummarizationProvider(ABC):
    @abstractmethod
    def summarize(self, claim: Claim, notes: List[str]) -> ClaimSummary:
        ...
