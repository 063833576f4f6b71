"""Core components."""

from .descriptor import (
    EndpointDescriptor,
    ResponseTransformer,
    SlugValidityCheck,
    SlugValueForPath,
)
from .endpoint import Endpoint, ResponseCallback
from .enums import OperationType
from .exceptions import (
    ConfigurationError,
    ContentTypeError,
    HTTPStatusError,
    MappingError,
    PolymerError,
    RateLimitError,
    TransportError,
    UnknownResponseError,
)
from .reconcile import (
    EmptyOutcome,
    FailedOutcome,
    ManyOutcome,
    OneOutcome,
    RawOutcome,
    classify_outcome,
    reconcile,
    reconcile_raw,
)

__all__ = [
    "ConfigurationError",
    "ContentTypeError",
    "EmptyOutcome",
    "Endpoint",
    "EndpointDescriptor",
    "FailedOutcome",
    "HTTPStatusError",
    "ManyOutcome",
    "MappingError",
    "OneOutcome",
    "OperationType",
    "PolymerError",
    "RateLimitError",
    "RawOutcome",
    "ResponseCallback",
    "ResponseTransformer",
    "SlugValidityCheck",
    "SlugValueForPath",
    "TransportError",
    "UnknownResponseError",
    "classify_outcome",
    "reconcile",
    "reconcile_raw",
]
