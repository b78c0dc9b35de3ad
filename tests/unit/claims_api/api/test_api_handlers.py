from __future__ import annotations

import json
import pathlib
import unittest
from typing import Any, Dict, Optional
from unittest.mock import MagicMock, patch

from claims_api import service
from claims_api.api import handlers
from claims_api.config import load_settings
from claims_api.exceptions import UnsupportedInMockModeError, ValidationError

MOCKS_DIR = pathlib.Path(__file__).resolve().parents[4] / "mocks"


def _event(method: str, path: str, body: Optional[Any] = None) -> Dict[str, Any]:
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    return {
        "resource": path,
        "path": path,
        "httpMethod": method,
        "headers": {"Content-Type": "application/json"},
        "multiValueHeaders": {"Content-Type": ["application/json"]},
        "queryStringParameters": None,
        "multiValueQueryStringParameters": None,
        "pathParameters": None,
        "stageVariables": None,
        "requestContext": {
            "stage": "prod",
            "requestId": "req-1",
            "path": f"/prod{path}",
            "resourcePath": path,
            "httpMethod": method,
        },
        "body": body,
        "isBase64Encoded": False,
    }


def _body(response: Dict[str, Any]) -> Any:
    return json.loads(response["body"])


class TestApiHandlersMockMode(unittest.TestCase):
    def setUp(self) -> None:
        self.service = service.build_service(load_settings({"USE_MOCKS": "true", "MOCKS_DIR": str(MOCKS_DIR)}))
        patcher = patch("claims_api.api.handlers.get_service", return_value=self.service)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_health(self) -> None:
        response = handlers.app.resolve(_event("GET", "/claims/health"), None)
        self.assertEqual(response["statusCode"], 200)
        self.assertEqual(_body(response), {"status": "ok"})

    def test_get_claim(self) -> None:
        response = handlers.app.resolve(_event("GET", "/claims/CLM-1002"), None)
        self.assertEqual(response["statusCode"], 200)
        self.assertEqual(
            _body(response),
            {
                "id": "CLM-1002",
                "status": "PENDING_INFO",
                "policyNumber": "POL-77410",
                "lastUpdated": "2024-05-06T09:02:44.000Z",
                "amount": 1875.5,
                "customerName": "Derek Chen",
                "adjuster": "A. Okafor",
            },
        )

    def test_get_unknown_claim_is_404(self) -> None:
        response = handlers.app.resolve(_event("GET", "/claims/CLM-404"), None)
        self.assertEqual(response["statusCode"], 404)
        self.assertEqual(_body(response)["message"], "Claim CLM-404 not found")

    def test_summarize(self) -> None:
        response = handlers.app.resolve(_event("POST", "/claims/CLM-1001/summarize"), None)
        self.assertEqual(response["statusCode"], 201)
        body = _body(response)
        self.assertEqual(body["claimId"], "CLM-1001")
        self.assertEqual(
            set(body),
            {"claimId", "overallSummary", "customerSummary", "adjusterSummary", "recommendedNextStep"},
        )

    def test_summarize_unknown_claim_is_404(self) -> None:
        response = handlers.app.resolve(_event("POST", "/claims/CLM-404/summarize"), None)
        self.assertEqual(response["statusCode"], 404)

    def test_create_in_mock_mode_fails(self) -> None:
        payload = {"policyNumber": "POL-1", "amount": 10, "customerName": "Jane", "adjuster": "Sam"}
        with self.assertRaises(UnsupportedInMockModeError):
            handlers.app.resolve(_event("POST", "/claims", payload), None)


class TestCreateClaimRoute(unittest.TestCase):
    def setUp(self) -> None:
        self.service = MagicMock()
        patcher = patch("claims_api.api.handlers.get_service", return_value=self.service)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_create_claim(self) -> None:
        created = {"id": "CLM-9", "status": "OPEN"}
        self.service.create_claim.return_value = created
        payload = {
            "policyNumber": "POL-1",
            "amount": 10.5,
            "customerName": "Jane",
            "adjuster": "Sam",
            "notes": ["first"],
        }

        response = handlers.app.resolve(_event("POST", "/claims", payload), None)

        self.assertEqual(response["statusCode"], 201)
        self.assertEqual(_body(response), created)
        request = self.service.create_claim.call_args.args[0]
        self.assertEqual(request.policy_number, "POL-1")
        self.assertEqual(request.amount, 10.5)
        self.assertEqual(request.notes, ["first"])

    def test_missing_policy_number_is_400(self) -> None:
        payload = {"amount": 10, "customerName": "Jane", "adjuster": "Sam"}
        response = handlers.app.resolve(_event("POST", "/claims", payload), None)

        self.assertEqual(response["statusCode"], 400)
        self.assertIn("policyNumber must be a string", _body(response)["message"])
        self.service.create_claim.assert_not_called()

    def test_non_numeric_amount_is_400(self) -> None:
        payload = {"policyNumber": "POL-1", "amount": "ten", "customerName": "Jane", "adjuster": "Sam"}
        response = handlers.app.resolve(_event("POST", "/claims", payload), None)

        self.assertEqual(response["statusCode"], 400)
        self.service.create_claim.assert_not_called()

    def test_invalid_json_is_400(self) -> None:
        response = handlers.app.resolve(_event("POST", "/claims", "{oops"), None)

        self.assertEqual(response["statusCode"], 400)
        self.service.create_claim.assert_not_called()

    def test_invalid_json_error_is_not_chained(self) -> None:
        with patch.object(handlers.app, "current_event", MagicMock(body="{oops")):
            with self.assertRaises(ValidationError) as ctx:
                handlers.create_claim()
        self.assertIsNone(ctx.exception.__cause__)
        self.assertTrue(ctx.exception.__suppress_context__)

    def test_non_finite_amount_is_400(self) -> None:
        for constant in ("NaN", "Infinity", "-Infinity"):
            body = '{"policyNumber": "POL-1", "amount": ' + constant + ', "customerName": "Jane", "adjuster": "Sam"}'
            response = handlers.app.resolve(_event("POST", "/claims", body), None)

            self.assertEqual(response["statusCode"], 400)
            self.assertIn("amount must be a number", _body(response)["message"])
        self.service.create_claim.assert_not_called()


if __name__ == "__main__":
    unittest.main()
