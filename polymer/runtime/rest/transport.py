"""Transport collaborator: protocol and default aiohttp implementation.

Architecture:
    ``Endpoint`` never performs I/O. For each verb it awaits the matching
    method of a ``RESTTransport``, handing over the descriptor, slug,
    parameters and a completion callback. The transport reports exactly once
    through ``completion(raw_result, raw_error)``; the endpoint reconciles
    that pair into a ``Response``.

    ``HTTPTransport`` is the bundled implementation. It builds the URL
    (including slug substitution), encodes parameters through the
    descriptor's request serializer, sends the request with ``HTTPClient``,
    decodes the body through the response serializer and maps it into the
    result type.

Design Decisions:
    - Runtime failures are reported through the completion, never raised,
      so one transport call always produces one completion. A
      ``ConfigurationError`` (e.g. a result type pydantic cannot build a
      schema for) is a programming mistake and propagates.
    - A successful response with no body maps to an empty list (e.g. a 204
      from DELETE) instead of an unclassifiable outcome.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import aiohttp
from pydantic import BaseModel

from ...config import DEFAULT_TIMEOUT
from ...core.enums import OperationType
from ...core.exceptions import (
    ConfigurationError,
    ContentTypeError,
    HTTPStatusError,
    MappingError,
    PolymerError,
    TransportError,
)
from .http_client import HTTPClient, HTTPReply
from .mapping import process_response
from .serializers import (
    JSONRequestSerializer,
    JSONResponseSerializer,
    RequestSerializer,
    ResponseSerializer,
)
from .url import build_url

if TYPE_CHECKING:
    from ...core.descriptor import EndpointDescriptor

logger = logging.getLogger(__name__)

Completion = Callable[[Any, "BaseException | None"], None]
Parameters = Mapping[str, Any] | BaseModel


@runtime_checkable
class RESTTransport(Protocol):
    """What an ``Endpoint`` needs from its transport.

    Each verb must call ``completion`` exactly once before its coroutine
    returns. A completion that arrives after the coroutine has returned is
    ignored; the endpoint has already delivered an unknown-response error.
    """

    async def get(
        self,
        descriptor: EndpointDescriptor,
        slug: Any,
        parameters: Parameters | None,
        completion: Completion,
        *,
        result_type: type,
    ) -> None: ...

    async def post(
        self,
        descriptor: EndpointDescriptor,
        slug: Any,
        parameters: Parameters | None,
        completion: Completion,
        *,
        result_type: type,
    ) -> None: ...

    async def put(
        self,
        descriptor: EndpointDescriptor,
        slug: Any,
        parameters: Parameters | None,
        completion: Completion,
        *,
        result_type: type,
    ) -> None: ...

    async def patch(
        self,
        descriptor: EndpointDescriptor,
        slug: Any,
        parameters: Parameters | None,
        completion: Completion,
        *,
        result_type: type,
    ) -> None: ...

    async def delete(
        self,
        descriptor: EndpointDescriptor,
        slug: Any,
        parameters: Parameters | None,
        completion: Completion,
        *,
        result_type: type,
    ) -> None: ...

    async def close(self) -> None: ...


def encode_parameters(parameters: Parameters | None) -> dict[str, Any] | None:
    """Plain dict form of the parameter bag."""
    if parameters is None:
        return None
    if isinstance(parameters, BaseModel):
        return parameters.model_dump(mode="json", by_alias=True, exclude_none=True)
    return dict(parameters)


def build_headers(
    descriptor: EndpointDescriptor,
    request_headers: Mapping[str, str],
    response_serializer: ResponseSerializer,
) -> dict[str, str]:
    """Merge serializer, accept and descriptor headers.

    Descriptor ``header_fields`` win over anything derived.
    """
    headers: dict[str, str] = dict(request_headers)
    accept = descriptor.acceptable_content_types or response_serializer.accept
    if accept:
        headers["Accept"] = ", ".join(sorted(accept))
    for name, value in (descriptor.header_fields or {}).items():
        headers[name] = str(value)
    return headers


class HTTPTransport:
    """aiohttp-backed ``RESTTransport``."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: HTTPClient | None = None,
    ) -> None:
        self._http = http_client or HTTPClient(timeout=timeout)

    async def get(self, descriptor, slug, parameters, completion, *, result_type) -> None:
        await self._dispatch(
            OperationType.GET, descriptor, slug, parameters, completion, result_type
        )

    async def post(self, descriptor, slug, parameters, completion, *, result_type) -> None:
        await self._dispatch(
            OperationType.POST, descriptor, slug, parameters, completion, result_type
        )

    async def put(self, descriptor, slug, parameters, completion, *, result_type) -> None:
        await self._dispatch(
            OperationType.PUT, descriptor, slug, parameters, completion, result_type
        )

    async def patch(self, descriptor, slug, parameters, completion, *, result_type) -> None:
        await self._dispatch(
            OperationType.PATCH, descriptor, slug, parameters, completion, result_type
        )

    async def delete(self, descriptor, slug, parameters, completion, *, result_type) -> None:
        await self._dispatch(
            OperationType.DELETE, descriptor, slug, parameters, completion, result_type
        )

    async def _dispatch(
        self,
        operation: OperationType,
        descriptor: EndpointDescriptor,
        slug: Any,
        parameters: Parameters | None,
        completion: Completion,
        result_type: type,
    ) -> None:
        try:
            result = await self._perform(operation, descriptor, slug, parameters, result_type)
        except ConfigurationError:
            raise
        except PolymerError as exc:
            logger.debug(
                "Request failed",
                extra={"operation": operation.value, "error": repr(exc)},
            )
            completion(None, exc)
            return
        completion(result, None)

    async def _perform(
        self,
        operation: OperationType,
        descriptor: EndpointDescriptor,
        slug: Any,
        parameters: Parameters | None,
        result_type: type,
    ) -> Any:
        url = build_url(descriptor, slug)
        request_serializer: RequestSerializer = (
            descriptor.request_serializer or JSONRequestSerializer()
        )
        response_serializer: ResponseSerializer = (
            descriptor.response_serializer or JSONResponseSerializer()
        )
        encoded = request_serializer.encode(operation, encode_parameters(parameters))
        headers = build_headers(descriptor, encoded.headers, response_serializer)

        logger.debug("Sending request", extra={"operation": operation.value, "url": url})
        try:
            reply = await self._http.request(
                operation.value,
                url,
                params=encoded.query,
                headers=headers,
                data=encoded.body,
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(
                f"{operation.value} {url} failed: {exc.__class__.__name__}: {exc}"
            ) from exc

        if reply.status >= 400:
            raise HTTPStatusError(
                f"{operation.value} {url} failed with status {reply.status}",
                status_code=reply.status,
                body=self._decode_error_body(reply, response_serializer),
            )

        self._check_content_type(descriptor, reply)
        try:
            body = response_serializer.decode(reply.body, reply.charset)
        except (ValueError, LookupError) as exc:
            raise MappingError(f"Could not decode response from {url}: {exc}") from exc
        if body is None:
            return []

        mapped = process_response(descriptor, body, reply.headers, result_type)
        return [] if mapped is None else mapped

    @staticmethod
    def _check_content_type(descriptor: EndpointDescriptor, reply: HTTPReply) -> None:
        acceptable = descriptor.acceptable_content_types
        if not acceptable or not reply.body:
            return
        if reply.content_type not in acceptable:
            raise ContentTypeError(
                f"Unacceptable content type {reply.content_type!r}; "
                f"expected one of {sorted(acceptable)}",
                content_type=reply.content_type,
            )

    @staticmethod
    def _decode_error_body(reply: HTTPReply, serializer: ResponseSerializer) -> Any:
        try:
            return serializer.decode(reply.body, reply.charset)
        except (ValueError, LookupError):
            return reply.body

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> HTTPTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
