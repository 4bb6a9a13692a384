"""Unit tests for mapping downstream responses into Results."""

import json
from decimal import Decimal
from typing import List
from uuid import UUID

import httpx
import pytest
from pydantic import ValidationError

from app.models.product import Product
from app.sao.response_mapper import map_downstream_response

pytestmark = pytest.mark.unit

PRODUCT_ID = "3fa85f64-5717-4562-b3fc-2c963f66afa6"
WIDGET = {"id": PRODUCT_ID, "name": "Widget", "price": 9.99, "stock": 5}


def _response(status_code: int, body=None, content: bytes = None) -> httpx.Response:
    if content is None:
        content = b"" if body is None else json.dumps(body).encode()
    return httpx.Response(status_code, content=content, headers={"content-type": "application/json"})


class TestSuccessfulResponses:
    def test_product_body_is_deserialized(self):
        result = map_downstream_response(_response(200, WIDGET), Product)

        assert result.succeeded is True
        assert result.status_code == 200
        assert result.value == Product(
            id=UUID(PRODUCT_ID), name="Widget", price=Decimal("9.99"), stock=5
        )

    def test_list_body_is_deserialized(self):
        result = map_downstream_response(_response(200, [WIDGET, WIDGET]), List[Product], "Products")

        assert result.succeeded is True
        assert [p.name for p in result.value] == ["Widget", "Widget"]

    def test_created_counts_as_success(self):
        assert map_downstream_response(_response(201, WIDGET), Product).succeeded is True

    @pytest.mark.parametrize("content", [b"", b"   ", b"null"])
    def test_empty_body_is_a_204_failure(self, content):
        result = map_downstream_response(_response(200, content=content), Product)

        assert result.succeeded is False
        assert result.value is None
        assert result.status_code == 204
        assert result.error_message == "Empty response from downstream service"

    def test_malformed_body_is_not_classified(self):
        with pytest.raises(ValueError):
            map_downstream_response(_response(200, content=b"{not json"), Product)

    def test_body_of_wrong_shape_is_not_classified(self):
        with pytest.raises(ValidationError):
            map_downstream_response(_response(200, {"name": "Widget"}), Product)


class TestFailedResponses:
    @pytest.mark.parametrize(
        ("status_code", "message"),
        [
            (401, "Unauthorized access to downstream service"),
            (403, "Forbidden access to downstream service"),
            (400, "Bad request to downstream service"),
            (500, "Downstream service error: 500"),
            (502, "Downstream service error: 502"),
            (409, "Downstream service error: 409"),
        ],
    )
    def test_status_mapping(self, status_code, message):
        result = map_downstream_response(_response(status_code, {"detail": "x"}), Product)

        assert result.succeeded is False
        assert result.value is None
        assert result.status_code == status_code
        assert result.error_message == message

    def test_not_found_uses_type_name(self):
        result = map_downstream_response(_response(404), Product)

        assert result.status_code == 404
        assert result.error_message == "Product not found"

    def test_not_found_uses_explicit_resource_name(self):
        result = map_downstream_response(_response(404), List[Product], "Products")

        assert result.error_message == "Products not found"

    def test_mapping_is_deterministic(self):
        first = map_downstream_response(_response(503), Product)
        second = map_downstream_response(_response(200, WIDGET), Product)
        third = map_downstream_response(_response(503), Product)

        assert first == third
        assert second == map_downstream_response(_response(200, WIDGET), Product)
