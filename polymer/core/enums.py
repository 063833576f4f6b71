"""Core enumerations."""

from enum import Enum


class OperationType(str, Enum):
    """HTTP verb of the call an endpoint is currently dispatching.

    String enum so the value doubles as the HTTP method name.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        """Whether parameters travel in the request body rather than the query."""
        return self in (OperationType.POST, OperationType.PUT, OperationType.PATCH)
