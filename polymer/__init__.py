"""Polymer - typed REST endpoints with a uniform Result/Error contract."""

from .config import ERROR_DOMAIN
from .core import (
    ConfigurationError,
    ContentTypeError,
    Endpoint,
    EndpointDescriptor,
    HTTPStatusError,
    MappingError,
    OperationType,
    PolymerError,
    RateLimitError,
    TransportError,
    UnknownResponseError,
    reconcile_raw,
)
from .models import Error, Response, Result
from .runtime.rest import (
    FormRequestSerializer,
    HTTPClient,
    HTTPTransport,
    JSONRequestSerializer,
    JSONResponseSerializer,
    RESTTransport,
    TextResponseSerializer,
)

__version__ = "0.1.0"

__all__ = [
    "ERROR_DOMAIN",
    "ConfigurationError",
    "ContentTypeError",
    "Endpoint",
    "EndpointDescriptor",
    "Error",
    "FormRequestSerializer",
    "HTTPClient",
    "HTTPStatusError",
    "HTTPTransport",
    "JSONRequestSerializer",
    "JSONResponseSerializer",
    "MappingError",
    "OperationType",
    "PolymerError",
    "RESTTransport",
    "RateLimitError",
    "Response",
    "Result",
    "TextResponseSerializer",
    "TransportError",
    "UnknownResponseError",
    "reconcile_raw",
]
