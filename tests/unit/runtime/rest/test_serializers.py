"""Unit tests for request and response serializers."""

import json

import pytest

from polymer.core import OperationType
from polymer.runtime.rest import (
    FormRequestSerializer,
    JSONRequestSerializer,
    JSONResponseSerializer,
    TextResponseSerializer,
)
from polymer.runtime.rest.serializers import encode_query


class TestEncodeQuery:
    """Test query flattening."""

    def test_scalars(self):
        assert encode_query({"limit": 10, "q": "abc"}) == [("limit", "10"), ("q", "abc")]

    def test_drops_none(self):
        assert encode_query({"a": None, "b": 1}) == [("b", "1")]

    def test_booleans(self):
        assert encode_query({"open": True, "closed": False}) == [
            ("open", "true"),
            ("closed", "false"),
        ]

    def test_lists_repeat_key(self):
        assert encode_query({"id": [1, 2]}) == [("id", "1"), ("id", "2")]


class TestJSONRequestSerializer:
    """Test JSON request encoding per operation."""

    @pytest.mark.parametrize("operation", [OperationType.GET, OperationType.DELETE])
    def test_query_operations(self, operation):
        encoded = JSONRequestSerializer().encode(operation, {"page": 2})
        assert encoded.query == [("page", "2")]
        assert encoded.body is None
        assert encoded.headers == {}

    @pytest.mark.parametrize(
        "operation", [OperationType.POST, OperationType.PUT, OperationType.PATCH]
    )
    def test_body_operations(self, operation):
        encoded = JSONRequestSerializer().encode(operation, {"name": "x", "tags": ["a"]})
        assert encoded.query is None
        assert json.loads(encoded.body) == {"name": "x", "tags": ["a"]}
        assert encoded.headers == {"Content-Type": "application/json"}

    def test_no_payload(self):
        encoded = JSONRequestSerializer().encode(OperationType.POST, None)
        assert encoded.query is None
        assert encoded.body is None


class TestFormRequestSerializer:
    def test_form_body(self):
        encoded = FormRequestSerializer().encode(
            OperationType.POST, {"name": "a b", "admin": False}
        )
        assert encoded.body == b"name=a+b&admin=false"
        assert encoded.headers == {"Content-Type": "application/x-www-form-urlencoded"}


class TestResponseSerializers:
    def test_json_decode(self):
        assert JSONResponseSerializer().decode(b'{"id": 1}') == {"id": 1}

    def test_json_empty_body(self):
        assert JSONResponseSerializer().decode(b"") is None
        assert JSONResponseSerializer().decode(b"  \n") is None

    def test_json_charset(self):
        body = '{"name": "café"}'.encode("latin-1")
        assert JSONResponseSerializer().decode(body, "latin-1") == {"name": "café"}

    def test_json_invalid_raises_value_error(self):
        with pytest.raises(ValueError):
            JSONResponseSerializer().decode(b"<html>")

    def test_text_decode(self):
        assert TextResponseSerializer().decode(b"pong") == "pong"

    def test_accept(self):
        assert JSONResponseSerializer.accept == ("application/json",)
        assert TextResponseSerializer.accept == ("text/plain",)
