"""SustainedLoadScheduler — normal mode: a long-lived pool ticking at a fixed rate."""

import asyncio
import contextlib

from mcp_bench.config.domain.config import BenchConfig
from mcp_bench.core.cancellation import CancellationToken
from mcp_bench.load.application.batch import BatchBuilder
from mcp_bench.load.domain.observer import LoadObserver
from mcp_bench.load.domain.statistics import RunStatistics
from mcp_bench.load.domain.summary import RunSummary
from mcp_bench.session.domain.session import Session
from mcp_bench.session.infrastructure.errors import (
    SessionCreationCancelledError,
    SessionCreationError,
)

PROGRESS_EVERY_OPERATIONS = 100


class SustainedLoadScheduler:
    """Builds the session pool, then drives every session from its own timer.

    Each session ticks every ``60 / ops_rate`` seconds on fixed-rate deadlines
    and issues one operation per tick. Failures are counted and logged, but a
    failing session stays in rotation until the run is cancelled.
    """

    def __init__(
        self,
        config: BenchConfig,
        batch_builder: BatchBuilder,
        statistics: RunStatistics,
        cancellation: CancellationToken,
        observer: LoadObserver,
    ) -> None:
        self._config = config
        self._batch_builder = batch_builder
        self._statistics = statistics
        self._cancellation = cancellation
        self._observer = observer
        self._in_flight: set[asyncio.Task[None]] = set()

    async def run(self) -> RunSummary:
        """Run until cancelled and return the counters frozen at shutdown.

        Raises:
            SessionCreationError: if initial pool construction exhausts retries.
                Sessions created before the failure are closed first.
        """
        created: list[Session] = []
        try:
            pool = await self._batch_builder.create_pool(
                total=self._config.clients,
                width=self._config.clients_creation_batch_size,
                created=created,
            )
        except SessionCreationError as exc:
            self._observer.pool_failed(created=len(created), reason=str(exc))
            await self._batch_builder.close_all(sessions=created)
            raise
        except SessionCreationCancelledError:
            self._statistics.record_clients_created(len(created))
            return await self._shutdown(tickers=[], sessions=created)

        self._statistics.record_clients_created(len(pool))
        if self._cancellation.cancelled:
            return await self._shutdown(tickers=[], sessions=pool)

        self._observer.pool_ready(pool_size=len(pool))
        self._statistics.restart_clock()

        tickers = [
            asyncio.create_task(
                self._tick(session=session), name=f"ticker:{session.label}"
            )
            for session in pool
        ]
        await self._cancellation.wait()
        return await self._shutdown(tickers=tickers, sessions=pool)

    async def _tick(self, session: Session) -> None:
        """Fire one operation per period until cancelled; never drifts."""
        loop = asyncio.get_running_loop()
        period = self._config.tick_interval_seconds
        next_deadline = loop.time() + period
        current: asyncio.Task[None] | None = None

        while await self._cancellation.sleep(next_deadline - loop.time()):
            next_deadline += period
            if (
                self._config.tick_overlap == "skip"
                and current is not None
                and not current.done()
            ):
                self._statistics.record_operation_skipped()
                self._observer.tick_skipped(label=session.label)
                continue
            current = asyncio.create_task(self._operate(session=session))
            self._in_flight.add(current)
            current.add_done_callback(self._in_flight.discard)

    async def _operate(self, session: Session) -> None:
        try:
            await session.invoke_operation(
                timeout_seconds=self._config.operation_timeout_seconds
            )
        except Exception as exc:  # noqa: BLE001
            self._statistics.record_operation_failed()
            self._observer.operation_failed(label=session.label, reason=str(exc))
            return

        completed = self._statistics.record_operation_succeeded()
        self._observer.operation_succeeded(label=session.label)
        if completed % PROGRESS_EVERY_OPERATIONS == 0:
            self._observer.sustained_progress(
                completed=completed,
                failed=self._statistics.operations_failed,
                ops_per_second=completed / max(self._statistics.elapsed_seconds, 1e-9),
            )

    async def _shutdown(
        self, tickers: list[asyncio.Task[None]], sessions: list[Session]
    ) -> RunSummary:
        """Stop timers, freeze counters, abandon in-flight operations, close all."""
        for ticker in tickers:
            ticker.cancel()
        for ticker in tickers:
            with contextlib.suppress(asyncio.CancelledError):
                await ticker

        summary = self._statistics.snapshot()

        pending = list(self._in_flight)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        self._observer.sessions_closing(total=len(sessions))
        failures = await self._batch_builder.close_all(sessions=sessions)
        self._observer.sessions_closed(total=len(sessions), failed=failures)
        return summary
