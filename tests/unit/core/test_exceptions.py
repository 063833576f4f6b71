"""Precise unit tests for exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

import pytest

from polymer import ERROR_DOMAIN
from polymer.core import (
    ContentTypeError,
    HTTPStatusError,
    MappingError,
    PolymerError,
    RateLimitError,
    TransportError,
    UnknownResponseError,
)


def test_polymer_error_defaults():
    """Default domain and code come from config."""
    error = PolymerError("boom")
    assert error.domain == ERROR_DOMAIN == "com.polymer.errordomain"
    assert error.code == 1
    assert error.message == "boom"
    assert str(error) == "boom"


def test_polymer_error_custom_domain_and_code():
    error = PolymerError("timeout", domain="com.example.net", code=-1001)
    assert error.domain == "com.example.net"
    assert error.code == -1001


def test_polymer_error_requires_message():
    """Every structured error carries a non-empty message."""
    with pytest.raises(ValueError):
        PolymerError("")


def test_repr_includes_structure():
    error = PolymerError("boom", code=7)
    assert repr(error) == (
        "PolymerError(domain='com.polymer.errordomain', code=7, message='boom')"
    )


def test_http_status_error_uses_status_as_code():
    """HTTPStatusError exposes the status as both code and status_code."""
    error = HTTPStatusError("not found", status_code=404, body={"detail": "missing"})
    assert error.code == 404
    assert error.status_code == 404
    assert error.body == {"detail": "missing"}
    assert isinstance(error, TransportError)
    assert isinstance(error, PolymerError)


def test_rate_limit_error_with_retry_after():
    """RateLimitError carries status and retry_after."""
    error = RateLimitError("slow down", status_code=418, retry_after=2.5)
    assert error.status_code == 418
    assert error.retry_after == 2.5
    assert isinstance(error, HTTPStatusError)


def test_content_type_error_records_type():
    error = ContentTypeError("bad type", content_type="text/html")
    assert error.content_type == "text/html"
    assert isinstance(error, TransportError)


def test_hierarchy():
    """All runtime failures share the PolymerError base."""
    for cls in (MappingError, UnknownResponseError, TransportError):
        assert issubclass(cls, PolymerError)
