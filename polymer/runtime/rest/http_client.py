"""HTTP client helper."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from ...config import (
    DEFAULT_RETRY_AFTER,
    DEFAULT_TIMEOUT,
    MAX_RATE_LIMIT_ATTEMPTS,
    RATE_LIMIT_STATUSES,
)
from ...core.exceptions import RateLimitError

logger = logging.getLogger(__name__)

# Hook receives the raw aiohttp response and may return a delay (seconds)
# to throttle subsequent requests.
ResponseHook = Callable[[aiohttp.ClientResponse], "float | None | Awaitable[float | None]"]


@dataclass(frozen=True)
class HTTPReply:
    """Status, headers and undecoded body of a completed request."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    content_type: str | None = None
    charset: str | None = None
    body: bytes = b""


def _parse_retry_after(value: str | None) -> float:
    if not value:
        return DEFAULT_RETRY_AFTER
    try:
        return max(float(value), 0.0)
    except ValueError:
        return DEFAULT_RETRY_AFTER


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []
        self._throttle_until: float | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a hook run on every response before it is read."""
        self._response_hooks.append(hook)

    def set_throttle(self, delay: float) -> None:
        """Delay the next request by at least ``delay`` seconds.

        An existing later throttle window is kept.
        """
        if delay <= 0:
            return
        until = time.monotonic() + delay
        if self._throttle_until is None or until > self._throttle_until:
            self._throttle_until = until

    async def _wait_for_throttle(self) -> None:
        if self._throttle_until is None:
            return
        remaining = self._throttle_until - time.monotonic()
        self._throttle_until = None
        if remaining > 0:
            logger.debug("Throttling request", extra={"delay": remaining})
            await asyncio.sleep(remaining)

    async def _run_hooks(self, response: aiohttp.ClientResponse) -> None:
        for hook in self._response_hooks:
            try:
                delay = hook(response)
                if inspect.isawaitable(delay):
                    delay = await delay
            except Exception:
                logger.warning("Response hook failed", exc_info=True)
                continue
            if delay:
                self.set_throttle(float(delay))

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Any = None,
        headers: dict[str, str] | None = None,
        data: bytes | None = None,
    ) -> HTTPReply:
        """Send a request and read the full body.

        Rate-limit statuses (429/418) are retried after the server's
        ``Retry-After``; any other status is returned to the caller.

        Raises:
            RateLimitError: If the server still rate limits after the last attempt
            aiohttp.ClientError: On connection failures
            asyncio.TimeoutError: When the request exceeds the timeout
        """
        attempt = 0
        while True:
            attempt += 1
            await self._wait_for_throttle()
            async with self.session.request(
                method, url, params=params, headers=headers, data=data
            ) as response:
                await self._run_hooks(response)
                if response.status in RATE_LIMIT_STATUSES:
                    retry_after = _parse_retry_after(response.headers.get("Retry-After"))
                    logger.warning(
                        "Rate limited",
                        extra={
                            "url": url,
                            "status": response.status,
                            "retry_after": retry_after,
                            "attempt": attempt,
                        },
                    )
                    if attempt >= MAX_RATE_LIMIT_ATTEMPTS:
                        raise RateLimitError(
                            f"{method} {url} rate limited after {attempt} attempts",
                            status_code=response.status,
                            retry_after=retry_after,
                        )
                    self.set_throttle(retry_after)
                    continue
                return HTTPReply(
                    status=response.status,
                    headers=dict(response.headers),
                    content_type=response.content_type,
                    charset=response.charset,
                    body=await response.read(),
                )

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
