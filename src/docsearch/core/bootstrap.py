"""Startup connection gate — Fixed-interval retry until the search engine answers.

The gate runs once, before the HTTP server accepts requests.  After a handle
has been established it is never re-created; if the engine becomes
unreachable later, errors surface on individual requests instead.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from docsearch.adapters.base.exceptions import AdapterError

if TYPE_CHECKING:
    from docsearch.config.settings import BootstrapSettings

_T = TypeVar("_T")

logger = logging.getLogger(__name__)


class UpstreamUnavailableError(AdapterError):
    """Raised when the retry policy gives up before the engine became reachable."""


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-interval retry policy.

    Attributes:
        interval: Seconds to wait between attempts.
        max_attempts: Maximum number of attempts, or None to retry forever.
    """

    interval: float = 5.0
    max_attempts: int | None = None

    @classmethod
    def from_settings(cls, settings: BootstrapSettings) -> RetryPolicy:
        return cls(interval=settings.retry_interval, max_attempts=settings.max_attempts)


async def connect_with_retry(
    connect: Callable[[], Awaitable[_T]],
    policy: RetryPolicy | None = None,
    *,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> _T:
    """Call ``connect`` until it succeeds.

    Args:
        connect: Zero-argument coroutine factory; each call is one attempt.
        policy: Retry policy. Defaults to every 5 seconds, forever.
        sleep: Awaitable sleep used between attempts (swap for a fake clock in tests).

    Returns:
        Whatever the first successful ``connect()`` call returned.

    Raises:
        UpstreamUnavailableError: If ``policy.max_attempts`` attempts all failed.
    """
    policy = policy or RetryPolicy()
    attempt = 0
    while True:
        attempt += 1
        try:
            result = await connect()
        except Exception as e:
            if policy.max_attempts is not None and attempt >= policy.max_attempts:
                logger.error("Search engine still unreachable after %d attempts, giving up", attempt)
                raise UpstreamUnavailableError(
                    f"Search engine unreachable after {attempt} attempts: {e}"
                ) from e
            logger.warning(
                "Search engine not ready (attempt %d): %s; retrying in %.1fs",
                attempt,
                e,
                policy.interval,
            )
            await sleep(policy.interval)
            continue

        if attempt > 1:
            logger.info("Search engine reachable after %d attempts", attempt)
        return result
