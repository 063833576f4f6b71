"""Runtime abstractions."""

from .rest import HTTPClient, HTTPTransport, RESTTransport

__all__ = ["HTTPClient", "HTTPTransport", "RESTTransport"]
