"""REST runtime: the transport collaborator endpoints dispatch through."""

from .http_client import HTTPClient, HTTPReply
from .serializers import (
    EncodedRequest,
    FormRequestSerializer,
    JSONRequestSerializer,
    JSONResponseSerializer,
    RequestSerializer,
    ResponseSerializer,
    TextResponseSerializer,
)
from .transport import Completion, HTTPTransport, RESTTransport

__all__ = [
    "Completion",
    "EncodedRequest",
    "FormRequestSerializer",
    "HTTPClient",
    "HTTPReply",
    "HTTPTransport",
    "JSONRequestSerializer",
    "JSONResponseSerializer",
    "RESTTransport",
    "RequestSerializer",
    "ResponseSerializer",
    "TextResponseSerializer",
]
