from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from claims_api.exceptions import ValidationError

CLAIM_STATUSES = ("OPEN", "PENDING_INFO", "CLOSED", "DENIED")

Number = Union[int, float]


@dataclass
class Claim:
    id: str
    status: str
    policy_number: str
    last_updated: str
    amount: Number
    customer_name: str
    adjuster: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status,
            "policyNumber": self.policy_number,
            "lastUpdated": self.last_updated,
            "amount": self.amount,
            "customerName": self.customer_name,
            "adjuster": self.adjuster,
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Claim":
        """Builds a Claim from a stored record (DynamoDB item or fixture entry)."""
        return cls(
            id=item.get("id", ""),
            status=item.get("status", "OPEN"),
            policy_number=item.get("policyNumber", ""),
            last_updated=item.get("lastUpdated", ""),
            amount=_from_dynamo_number(item.get("amount", 0)),
            customer_name=item.get("customerName", ""),
            adjuster=item.get("adjuster", ""),
        )


@dataclass
class ClaimSummary:
    claim_id: str
    overall_summary: str
    customer_summary: str
    adjuster_summary: str
    recommended_next_step: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "claimId": self.claim_id,
            "overallSummary": self.overall_summary,
            "customerSummary": self.customer_summary,
            "adjusterSummary": self.adjuster_summary,
            "recommendedNextStep": self.recommended_next_step,
        }


@dataclass
class CreateClaimRequest:
    policy_number: str
    amount: Number
    customer_name: str
    adjuster: str
    id: Optional[str] = None
    status: Optional[str] = None
    last_updated: Optional[str] = None
    notes: List[str] = field(default_factory=list)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a JSON number; NaN and Infinity are not JSON numbers either
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    return math.isfinite(value)


def parse_create_claim_request(payload: Any) -> CreateClaimRequest:
    """
    Validates a POST /claims body and returns the typed request.

    Every violation is collected so the caller sees them all at once.
    Unknown keys are ignored.

    Raises:
        ValidationError: payload does not match the create-claim schema
    """
    if not isinstance(payload, dict):
        raise ValidationError(["Request body must be a JSON object"])

    errors: List[str] = []

    for key in ("policyNumber", "customerName", "adjuster"):
        if not isinstance(payload.get(key), str):
            errors.append(f"{key} must be a string")

    if not _is_number(payload.get("amount")):
        errors.append("amount must be a number")

    for key in ("id", "lastUpdated"):
        if key in payload and payload[key] is not None and not isinstance(payload[key], str):
            errors.append(f"{key} must be a string")

    status = payload.get("status")
    if status is not None and status not in CLAIM_STATUSES:
        errors.append(f"status must be one of the following values: {', '.join(CLAIM_STATUSES)}")

    notes = payload.get("notes")
    if notes is not None:
        if not isinstance(notes, list):
            errors.append("notes must be an array")
        elif not all(isinstance(note, str) for note in notes):
            errors.append("each value in notes must be a string")

    if errors:
        raise ValidationError(errors)

    return CreateClaimRequest(
        policy_number=payload["policyNumber"],
        amount=payload["amount"],
        customer_name=payload["customerName"],
        adjuster=payload["adjuster"],
        id=payload.get("id"),
        status=status,
        last_updated=payload.get("lastUpdated"),
        notes=list(notes or []),
    )


def _from_dynamo_number(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def to_dynamo_compatible(value: Any) -> Any:
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {key: to_dynamo_compatible(item) for key, item in value.items()}
    if isinstance(value, list):
        return [to_dynamo_compatible(item) for item in value]
    return value
