from .claims import DynamoClaimRepository, MockClaimRepository
from .notes import MockNotesRepository, S3NotesRepository

__all__ = [
    "DynamoClaimRepository",
    "MockClaimRepository",
    "S3NotesRepository",
    "MockNotesRepository",
]
