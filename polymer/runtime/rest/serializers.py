"""Request and response serialization strategies.

A descriptor selects strategies through ``request_serializer`` and
``response_serializer``; the HTTP transport falls back to JSON for both.

Request serializers turn the parameter payload into a query string (GET,
DELETE) or an encoded body (POST, PUT, PATCH). Response serializers decode raw
body bytes into Python data.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from ...core.enums import OperationType


@dataclass(frozen=True)
class EncodedRequest:
    """Wire form of the parameters for one request."""

    query: list[tuple[str, str]] | None = None
    body: bytes | None = None
    headers: dict[str, str] = field(default_factory=dict)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(payload: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Flatten a payload into query pairs.

    ``None`` values are dropped, lists and tuples repeat the key and booleans
    become ``true``/``false``.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _query_value(item)) for item in value if item is not None)
        else:
            pairs.append((key, _query_value(value)))
    return pairs


class RequestSerializer:
    """Base request serializer.

    Subclasses implement ``encode_body``; query encoding is shared.
    """

    content_type: str | None = None

    def encode(self, operation: OperationType, payload: Mapping[str, Any] | None) -> EncodedRequest:
        if not payload:
            return EncodedRequest()
        if not operation.has_body:
            return EncodedRequest(query=encode_query(payload))
        headers = {"Content-Type": self.content_type} if self.content_type else {}
        return EncodedRequest(body=self.encode_body(payload), headers=headers)

    def encode_body(self, payload: Mapping[str, Any]) -> bytes:
        raise NotImplementedError


class JSONRequestSerializer(RequestSerializer):
    content_type = "application/json"

    def encode_body(self, payload: Mapping[str, Any]) -> bytes:
        return json.dumps(payload, default=str).encode("utf-8")


class FormRequestSerializer(RequestSerializer):
    """``application/x-www-form-urlencoded`` bodies."""

    content_type = "application/x-www-form-urlencoded"

    def encode_body(self, payload: Mapping[str, Any]) -> bytes:
        return urlencode(encode_query(payload)).encode("utf-8")


class ResponseSerializer:
    """Base response serializer.

    ``accept`` is sent as the ``Accept`` header unless the descriptor lists
    its own acceptable content types.
    """

    accept: tuple[str, ...] = ()

    def decode(self, body: bytes, charset: str | None = None) -> Any:
        raise NotImplementedError


class JSONResponseSerializer(ResponseSerializer):
    """Decode JSON; an empty body decodes to ``None``."""

    accept = ("application/json",)

    def decode(self, body: bytes, charset: str | None = None) -> Any:
        text = body.decode(charset or "utf-8")
        if not text.strip():
            return None
        return json.loads(text)


class TextResponseSerializer(ResponseSerializer):
    accept = ("text/plain",)

    def decode(self, body: bytes, charset: str | None = None) -> str:
        return body.decode(charset or "utf-8")
