"""
API Lambda Handler for the Claims API
Routes API Gateway REST events to ClaimsService use cases
"""
import json
from functools import lru_cache
from typing import Any, Dict

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig, Response, content_types
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from claims_api.config import get_settings
from claims_api.exceptions import ClaimNotFoundError, ValidationError
from claims_api.models import parse_create_claim_request
from claims_api.service import ClaimsService, build_service

logger = Logger()
tracer = Tracer()
metrics = Metrics(namespace="ClaimsApi")

cors_config = CORSConfig(allow_origin="*", allow_headers=["Content-Type", "Authorization"])
app = APIGatewayRestResolver(cors=cors_config)


@lru_cache(maxsize=1)
def get_service() -> ClaimsService:
    return build_service(get_settings())


def _json_response(status_code: int, body: Dict[str, Any]) -> Response:
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps(body, default=str),
    )


@app.exception_handler(ClaimNotFoundError)
def handle_not_found(ex: ClaimNotFoundError) -> Response:
    logger.info(str(ex))
    return _json_response(404, {"statusCode": 404, "message": str(ex), "error": "Not Found"})


@app.exception_handler(ValidationError)
def handle_validation_error(ex: ValidationError) -> Response:
    logger.info(f"Rejected create payload: {ex}")
    return _json_response(400, {"statusCode": 400, "message": ex.errors, "error": "Bad Request"})


@app.get("/claims/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/claims/<claim_id>")
@tracer.capture_method
def get_claim(claim_id: str) -> Dict[str, Any]:
    """GET /claims/{id}"""
    logger.info(f"Fetching claim with id: {claim_id}")
    tracer.put_annotation(key="claim_id", value=claim_id)
    return get_service().get_claim(claim_id)


@app.post("/claims/<claim_id>/summarize")
@tracer.capture_method
def summarize_claim(claim_id: str) -> Response:
    """POST /claims/{id}/summarize"""
    logger.info(f"Summarizing claim {claim_id}")
    tracer.put_annotation(key="claim_id", value=claim_id)
    return _json_response(201, get_service().summarize_claim(claim_id))


@app.post("/claims")
@tracer.capture_method
def create_claim() -> Response:
    """
    POST /claims

    Expected payload:
    {
        "policyNumber": "POL-1001",
        "amount": 1250.5,
        "customerName": "Jane Doe",
        "adjuster": "adjuster-001",
        "id": "CLM-1001",            # Optional
        "status": "OPEN",            # Optional: OPEN | PENDING_INFO | CLOSED | DENIED
        "lastUpdated": "2024-...Z",  # Optional
        "notes": ["..."]             # Optional
    }
    """
    raw_body = app.current_event.body or "{}"
    try:
        payload = json.loads(raw_body)
    except json.JSONDecodeError:
        raise ValidationError(["Request body must be valid JSON"]) from None

    request = parse_create_claim_request(payload)
    return _json_response(201, get_service().create_claim(request))


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    return app.resolve(event, context)
