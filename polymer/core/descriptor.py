"""Endpoint descriptor: declarative configuration for one REST resource.

Architecture:
    A descriptor is a plain configuration object. Concrete resources subclass
    ``EndpointDescriptor`` and override properties; the transport reads them
    when it builds the request and post-processes the response.

Design Decisions:
    - ``base_url`` and ``endpoint_url`` are abstract: a subclass that forgets
      either cannot be instantiated, so the mistake surfaces at construction
      instead of in the middle of a request.
    - Every other property has a safe default (``None``/``False``) so
      subclasses override only what they need.
    - ``current_operation`` is the only mutable state. The owning endpoint
      sets it right before dispatch so the transport (or a serializer) can
      branch on the verb.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .enums import OperationType

if TYPE_CHECKING:
    from ..runtime.rest.serializers import RequestSerializer, ResponseSerializer

# raw decoded response -> structure handed to the model mapper
ResponseTransformer = Callable[[Any], Any]
# (slug, slug path) -> whether the slug yields a usable value for that path
SlugValidityCheck = Callable[[Any, "str | None"], bool]
# (slug, slug path) -> value substituted into the path
SlugValueForPath = Callable[[Any, "str | None"], Any]


class EndpointDescriptor(ABC):
    """Abstract configuration bundle describing a REST resource."""

    def __init__(self) -> None:
        self._current_operation = OperationType.GET

    @property
    def current_operation(self) -> OperationType:
        """Verb of the most recently initiated call."""
        return self._current_operation

    def _set_operation(self, operation: OperationType) -> None:
        # Only the owning Endpoint writes this
        self._current_operation = operation

    # Required

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Scheme and host, e.g. ``https://api.example.com``."""

    @property
    @abstractmethod
    def endpoint_url(self) -> str:
        """Path template; components starting with ``:`` are slug paths."""

    # Optional

    @property
    def response_key_path(self) -> str | None:
        """Dotted path to the payload inside the decoded response."""
        return None

    @property
    def acceptable_content_types(self) -> set[str] | None:
        return None

    @property
    def header_fields(self) -> dict[str, Any] | None:
        return None

    @property
    def request_serializer(self) -> RequestSerializer | None:
        return None

    @property
    def response_serializer(self) -> ResponseSerializer | None:
        return None

    @property
    def should_append_header_to_response(self) -> bool:
        return False

    @property
    def response_transformer(self) -> ResponseTransformer | None:
        """Pre-processing applied to the raw response before mapping."""
        return None

    # Slug interaction

    @property
    def slug_validity_check(self) -> SlugValidityCheck | None:
        return None

    @property
    def slug_value_for_path(self) -> SlugValueForPath | None:
        return None

    def describe(self) -> dict[str, Any]:
        """Snapshot of the configuration, used for debug logging."""
        return {
            "descriptor": self.__class__.__name__,
            "operation": self.current_operation.value,
            "base_url": self.base_url,
            "endpoint_url": self.endpoint_url,
            "response_key_path": self.response_key_path,
            "acceptable_content_types": (
                sorted(self.acceptable_content_types)
                if self.acceptable_content_types is not None
                else None
            ),
            "header_fields": sorted(self.header_fields) if self.header_fields else None,
            "append_header": self.should_append_header_to_response,
            "has_transformer": self.response_transformer is not None,
        }
