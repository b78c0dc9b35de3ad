from __future__ import annotations

import json
from typing import Any, Dict, List

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit

from claims_api.models import Claim, ClaimSummary
from claims_api.ports import SummarizationProvider

logger = Logger(child=True)
tracer = Tracer()
metrics = Metrics(namespace="ClaimsApi")

MAX_TOKENS = 1024
TEMPERATURE = 0.3

MOCK_NEXT_STEP = "Verify documents and contact customer within 1 business day."
FALLBACK_NEXT_STEP = "Review generated summary and determine next action."

def build_prompt(claim: Claim, notes: List[str]) -> str:
    notes_text = "\n".join(notes)
    return "\n".join(
        [
            "You are a claims automation assistant. Produce concise outputs.",
            "Return JSON with keys: overallSummary, customerSummary, adjusterSummary, recommendedNextStep.",
            f"Claim: {json.dumps(claim.to_dict())}",
            f"Notes: {notes_text}",
            "Keep customerSummary plain-language and empathetic.",
            "Keep adjusterSummary action-oriented and specific.",
            "recommendedNextStep must be one actionable sentence.",
        ]
    )


def _extract_text(response_body: Dict[str, Any]) -> str:
    # Nova: {"output": {"message": {"content": [{"text": "..."}]}}, "usage": {...}}
    message = (response_body.get("output") or {}).get("message") or {}
    content = message.get("content") or []
    if not content or not isinstance(content[0], dict):
        return ""
    return content[0].get("text") or ""


def parse_model_response(claim_id: str, text: str) -> ClaimSummary:
    """
    Lenient parse of the model output.

    Any JSON value is mapped field by field (missing keys become "", except
    overallSummary which falls back to the raw text); non-object values have
    no keys. Invalid JSON or JSON null degrades to the raw text in every
    prose field.
    """
    try:
        parsed = json.loads(text)
    except ValueError as e:
        logger.warning(f"Model response was not JSON; returning raw text; {e}")
        return _fallback_summary(claim_id, text)

    if parsed is None:
        logger.warning("Model response was JSON null; returning raw text")
        return _fallback_summary(claim_id, text)

    # Strings, numbers and arrays carry none of the summary keys
    fields = parsed if isinstance(parsed, dict) else {}

    def field(key: str, default: str = "") -> str:
        value = fields.get(key)
        return default if value is None else str(value)

    return ClaimSummary(
        claim_id=claim_id,
        overall_summary=field("overallSummary", text),
        customer_summary=field("customerSummary"),
        adjuster_summary=field("adjusterSummary"),
        recommended_next_step=field("recommendedNextStep"),
    )


def _fallback_summary(claim_id: str, text: str) -> ClaimSummary:
    return ClaimSummary(
        claim_id=claim_id,
        overall_summary=text,
        customer_summary=text,
        adjuster_summary=text,
        recommended_next_step=FALLBACK_NEXT_STEP,
    )


class BedrockSummarizer(SummarizationProvider):
    def __init__(self, client: Any, model_id: str):
        self.client = client
        self.model_id = model_id

    @tracer.capture_method
    def summarize(self, claim: Claim, notes: List[str]) -> ClaimSummary:
        logger.info(f"Invoking Bedrock model {self.model_id} for claim {claim.id}")

        body = json.dumps({
            "messages": [
                {
                    "role": "user",
                    "content": [{"text": build_prompt(claim, notes)}]
                }
            ],
            "inferenceConfig": {
                "max_new_tokens": MAX_TOKENS,
                "temperature": TEMPERATURE
            }
        })

        response = self.client.invoke_model(
            modelId=self.model_id,
            contentType="application/json",
            accept="application/json",
            body=body,
        )
        resp_body = json.loads(response["body"].read())

        usage = resp_body.get("usage") or {}
        metrics.add_metric(name="InputTokenCount", unit=MetricUnit.Count, value=usage.get("inputTokens", 0))
        metrics.add_metric(name="OutputTokenCount", unit=MetricUnit.Count, value=usage.get("outputTokens", 0))

        return parse_model_response(claim.id, _extract_text(resp_body))


class MockSummarizer(SummarizationProvider):
    """Deterministic templated summary; no model call."""

    def summarize(self, claim: Claim, notes: List[str]) -> ClaimSummary:
        note_snippet = " ".join(notes[:2])
        return ClaimSummary(
            claim_id=claim.id,
            overall_summary=f"Claim {claim.id} is {claim.status}. {note_snippet}",
            customer_summary=f"We are working on your claim {claim.id}. Status: {claim.status}.",
            adjuster_summary=f"Focus on documentation for claim {claim.id}; latest note: {note_snippet}",
            recommended_next_step=MOCK_NEXT_STEP,
        )
