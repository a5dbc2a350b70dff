"""RetryingSessionFactory — establishes sessions with exponential backoff and jitter."""

import asyncio
import contextlib
import random

from mcp_bench.config.domain.config import RetryConfig
from mcp_bench.core.cancellation import CancellationToken
from mcp_bench.session.domain.backoff import next_delay_ms
from mcp_bench.session.domain.factory import SessionConnector
from mcp_bench.session.domain.observer import SessionObserver
from mcp_bench.session.domain.session import Session
from mcp_bench.session.infrastructure.errors import (
    SessionCreationCancelledError,
    SessionCreationError,
)


class RetryingSessionFactory:
    """Satisfies the SessionFactory protocol on top of a single-attempt connector.

    Transient connection errors are retried up to ``max_retries`` times; only a
    terminal failure reaches the caller. Backoff delays suspend the calling task
    alone and are cut short by the run's cancellation token.
    """

    def __init__(
        self,
        connector: SessionConnector,
        retry: RetryConfig,
        cancellation: CancellationToken,
        observer: SessionObserver,
        rng: random.Random | None = None,
    ) -> None:
        self._connector = connector
        self._retry = retry
        self._cancellation = cancellation
        self._observer = observer
        self._rng = rng

    async def create(self, label: str) -> Session:
        """Return an established session, retrying failed attempts.

        Raises:
            SessionCreationError: after ``max_retries + 1`` failed attempts.
            SessionCreationCancelledError: if the run is cancelled before an
                attempt, while an attempt is connecting, or during a backoff delay.
        """
        max_attempts = self._retry.max_retries + 1
        last_error: Exception | None = None

        for attempt in range(1, max_attempts + 1):
            if attempt > 1:
                retries = attempt - 1
                backoff_ms = next_delay_ms(
                    attempt=retries, retry=self._retry, rng=self._rng
                )
                self._observer.session_creation_retry(
                    label=label,
                    attempt=retries,
                    max_retries=self._retry.max_retries,
                    reason=str(last_error),
                    backoff_ms=backoff_ms,
                )
                elapsed = await self._cancellation.sleep(backoff_ms / 1000)
                if not elapsed:
                    self._raise_cancelled(label=label, attempts=retries)

            if self._cancellation.cancelled:
                self._raise_cancelled(label=label, attempts=attempt - 1)

            connecting = asyncio.create_task(
                self._connector.connect(label=label), name=f"connect:{label}"
            )
            try:
                finished = await self._cancellation.race(connecting)
            except asyncio.CancelledError:
                await _discard(connecting)
                raise
            if not finished:
                self._raise_cancelled(label=label, attempts=attempt)

            try:
                session = connecting.result()
            except Exception as exc:  # noqa: BLE001
                last_error = exc
                continue

            self._observer.session_created(label=label, attempts=attempt)
            return session

        self._observer.session_creation_failed(
            label=label, attempts=max_attempts, reason=str(last_error)
        )
        raise SessionCreationError(
            label=label, attempts=max_attempts, reason=str(last_error)
        ) from last_error

    def _raise_cancelled(self, label: str, attempts: int) -> None:
        self._observer.session_creation_cancelled(label=label, attempts=attempts)
        raise SessionCreationCancelledError(label=label, attempts=attempts)


async def _discard(connecting: asyncio.Task[Session]) -> None:
    """Abandon a connection attempt, closing its session if it already exists."""
    connecting.cancel()
    with contextlib.suppress(Exception, asyncio.CancelledError):
        session = await connecting
        await session.close()
