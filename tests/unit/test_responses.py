"""Unit tests for turning Results into boundary responses."""

import json
from decimal import Decimal
from uuid import UUID

import pytest

from app.core.responses import PROBLEM_MEDIA_TYPE, problem_response, result_response
from app.core.result import Result
from app.models.product import Product

pytestmark = pytest.mark.unit


def _body(response) -> dict:
    return json.loads(response.body)


class TestResultResponse:
    def test_success_carries_full_envelope(self):
        product = Product(
            id=UUID("3fa85f64-5717-4562-b3fc-2c963f66afa6"),
            name="Widget",
            price=Decimal("9.99"),
            stock=5,
        )

        response = result_response(Result.success(product))

        assert response.status_code == 200
        assert _body(response) == {
            "isSuccess": True,
            "error": "",
            "statusCode": 200,
            "value": {
                "id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                "name": "Widget",
                "description": None,
                "price": 9.99,
                "stock": 5,
            },
        }

    def test_created_sets_location(self):
        response = result_response(
            Result.success({"id": 1}),
            success_status=201,
            location="http://testserver/api/products/1",
        )

        assert response.status_code == 201
        assert response.headers["location"] == "http://testserver/api/products/1"

    def test_failure_becomes_problem(self):
        response = result_response(Result.failure("Downstream service error: 502", 502), instance="/api/products")

        assert response.status_code == 502
        assert response.media_type == PROBLEM_MEDIA_TYPE
        body = _body(response)
        assert body["status"] == 502
        assert body["detail"] == "Downstream service error: 502"
        assert body["title"] == "Bad Gateway"
        assert body["instance"] == "/api/products"
        assert body["isSuccess"] is False
        assert body["error"] == "Downstream service error: 502"
        assert body["statusCode"] == 502
        assert "value" not in body


class TestProblemResponse:
    def test_validation_errors_are_included(self):
        response = problem_response(
            400,
            "See the errors property for details.",
            title="One or more validation errors occurred.",
            errors={"name": ["Name is required"]},
        )

        body = _body(response)
        assert body["title"] == "One or more validation errors occurred."
        assert body["errors"] == {"name": ["Name is required"]}
        assert "instance" not in body

    def test_unknown_status_gets_generic_title(self):
        assert _body(problem_response(599, "odd"))["title"] == "Error"

    @pytest.mark.parametrize("status_code", [204, 205, 304])
    def test_bodyless_status_goes_out_as_bad_gateway(self, status_code):
        response = problem_response(status_code, "Empty response from downstream service")

        assert response.status_code == 502
        body = _body(response)
        assert body["status"] == 502
        assert body["title"] == "Bad Gateway"
        assert body["statusCode"] == status_code
        assert body["error"] == "Empty response from downstream service"

    def test_empty_downstream_result_keeps_its_status_code(self):
        response = result_response(Result.failure("Empty response from downstream service", 204))

        assert response.status_code == 502
        assert response.body
        assert _body(response)["statusCode"] == 204
