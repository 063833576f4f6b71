"""Custom exception hierarchy.

Every runtime failure an endpoint reports is a ``PolymerError``. The error is
structured: a ``domain`` naming the subsystem that produced it, a numeric
``code`` and a human-readable ``message``. Errors reach callers inside the
``Error`` response variant; only configuration mistakes are raised.
"""

from __future__ import annotations

from ..config import DEFAULT_ERROR_CODE, ERROR_DOMAIN


class PolymerError(Exception):
    """Base exception for all library errors."""

    def __init__(
        self,
        message: str,
        *,
        domain: str = ERROR_DOMAIN,
        code: int = DEFAULT_ERROR_CODE,
    ) -> None:
        if not message:
            raise ValueError("PolymerError requires a non-empty message")
        super().__init__(message)
        self.message = message
        self.domain = domain
        self.code = code

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(domain={self.domain!r}, "
            f"code={self.code!r}, message={self.message!r})"
        )


class ConfigurationError(PolymerError):
    """An endpoint or descriptor is declared incorrectly.

    Raised, never delivered through a response: it signals a programming
    mistake rather than a runtime condition.
    """

    pass


class UnknownResponseError(PolymerError):
    """The transport completed with neither a usable result nor an error."""

    pass


class TransportError(PolymerError):
    """Network-level failure reported by the transport."""

    pass


class HTTPStatusError(TransportError):
    """Server answered with an error status.

    ``code`` is the HTTP status; ``body`` holds the decoded error payload when
    the server sent one.
    """

    def __init__(self, message: str, *, status_code: int, body: object = None) -> None:
        super().__init__(message, code=status_code)
        self.status_code = status_code
        self.body = body


class RateLimitError(HTTPStatusError):
    """Server kept rate limiting after the client honoured ``Retry-After``."""

    def __init__(self, message: str, *, status_code: int = 429, retry_after: float = 1.0) -> None:
        super().__init__(message, status_code=status_code)
        self.retry_after = retry_after


class ContentTypeError(TransportError):
    """Response content type is not one the descriptor accepts."""

    def __init__(self, message: str, *, content_type: str | None = None) -> None:
        super().__init__(message)
        self.content_type = content_type


class MappingError(PolymerError):
    """Decoded response could not be mapped into the result type."""

    pass
