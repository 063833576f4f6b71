"""Post-processing of decoded responses into result objects.

Order applied by the HTTP transport:
    1. append response headers (``should_append_header_to_response``)
    2. unwrap ``response_key_path``
    3. run ``response_transformer``
    4. map into the result type
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import PydanticSchemaGenerationError, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ...config import HEADER_KEY, RESPONSE_KEY
from ...core.exceptions import ConfigurationError, MappingError, PolymerError
from ...utils.keypath import MISSING, resolve_key_path

if TYPE_CHECKING:
    from ...core.descriptor import EndpointDescriptor

T = TypeVar("T")


def append_header(body: Any, headers: Mapping[str, str]) -> dict[str, Any]:
    """Wrap the body together with the response headers."""
    return {HEADER_KEY: dict(headers), RESPONSE_KEY: body}


def unwrap_key_path(body: Any, key_path: str | None) -> Any:
    """Descend into ``body`` along a dotted key path.

    Raises:
        MappingError: If a path component is missing
    """
    if not key_path:
        return body
    value = resolve_key_path(body, key_path)
    if value is MISSING:
        raise MappingError(f"Response has no value at key path {key_path!r}")
    return value


@lru_cache(maxsize=128)
def _adapter_for(result_type: type) -> TypeAdapter:
    try:
        return TypeAdapter(result_type)
    except PydanticSchemaGenerationError as exc:
        raise ConfigurationError(
            f"Cannot map responses into {result_type.__name__}: {exc}"
        ) from exc


def map_objects(raw: Any, result_type: type[T]) -> T | list[T] | None:
    """Map raw decoded data into ``result_type`` instances.

    Lists map element-wise, anything else maps as a single object. ``None``
    stays ``None``.

    Raises:
        MappingError: If validation fails
        ConfigurationError: If pydantic cannot build a schema for ``result_type``
    """
    if raw is None:
        return None
    adapter = _adapter_for(result_type)
    try:
        if isinstance(raw, (list, tuple)):
            return [
                item if isinstance(item, result_type) else adapter.validate_python(item)
                for item in raw
            ]
        if isinstance(raw, result_type):
            return raw
        return adapter.validate_python(raw)
    except PydanticValidationError as exc:
        raise MappingError(
            f"Could not map response into {result_type.__name__}: {exc.error_count()} error(s)"
        ) from exc


def process_response(
    descriptor: EndpointDescriptor,
    body: Any,
    headers: Mapping[str, str],
    result_type: type[T],
) -> T | list[T] | None:
    """Run the full post-processing chain for one decoded response."""
    if descriptor.should_append_header_to_response:
        body = append_header(body, headers)
    body = unwrap_key_path(body, descriptor.response_key_path)
    transformer = descriptor.response_transformer
    if transformer is not None:
        try:
            body = transformer(body)
        except PolymerError:
            raise
        except Exception as exc:
            raise MappingError(
                f"Response transformer failed: {exc.__class__.__name__}: {exc}"
            ) from exc
    return map_objects(body, result_type)
