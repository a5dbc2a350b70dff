"""ChurnLoadScheduler — swarm mode: create a batch, use it once, dispose of it, repeat."""

import asyncio

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

PROGRESS_EVERY_BATCHES = 5


class ChurnLoadScheduler:
    """Models bursty connection churn rather than steady-state load.

    No session survives an iteration: each batch is created, exercised with
    exactly one operation per session, and fully closed before the interval
    wait that precedes the next batch.
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

    async def run(self) -> RunSummary:
        """Run iterations until cancelled or ``max_batches`` iterations ran.

        Creation failures are fatal to their own iteration only.
        """
        max_batches = self._config.max_batches
        iteration = 0
        while not self._cancellation.cancelled:
            iteration += 1
            await self._run_iteration(batch_number=iteration)
            if max_batches is not None and iteration >= max_batches:
                break
            await self._cancellation.sleep(self._config.swarm_interval_ms / 1000)

        return self._statistics.snapshot()

    async def _run_iteration(self, batch_number: int) -> None:
        batch_size = self._config.clients
        created: list[Session] = []
        self._observer.swarm_batch_started(
            batch_number=batch_number, batch_size=batch_size
        )
        try:
            await self._batch_builder.create_batch(size=batch_size, created=created)
        except (SessionCreationError, SessionCreationCancelledError) as exc:
            self._statistics.record_clients_created(len(created))
            if not self._cancellation.cancelled:
                self._observer.swarm_batch_failed(
                    batch_number=batch_number, created=len(created), reason=str(exc)
                )
            await self._batch_builder.close_all(sessions=created)
            return

        self._statistics.record_clients_created(len(created))

        operated = False
        if not self._cancellation.cancelled:
            self._observer.swarm_operations_started(
                batch_number=batch_number, sessions=len(created)
            )
            operated = await self._operate_once(sessions=created)

        self._observer.swarm_batch_closing(
            batch_number=batch_number, sessions=len(created)
        )
        await self._batch_builder.close_all(sessions=created)

        if not operated:
            return

        batches = self._statistics.record_batch_completed()
        if batches % PROGRESS_EVERY_BATCHES == 0:
            summary = self._statistics.snapshot()
            self._observer.swarm_progress(
                batches_completed=summary.batches_completed,
                clients_created=summary.clients_created,
                completed=summary.operations_completed,
                failed=summary.operations_failed,
                ops_per_second=summary.operations_per_second,
                elapsed_seconds=summary.elapsed_seconds,
            )

    async def _operate_once(self, sessions: list[Session]) -> bool:
        """One best-effort operation per session, abandoned if the run is cancelled.

        Returns False when abandoned; abandoned outcomes are not counted.
        """
        operations = asyncio.create_task(
            self._batch_builder.invoke_all(
                sessions=sessions,
                timeout_seconds=self._config.operation_timeout_seconds,
            )
        )
        if not await self._cancellation.race(operations):
            return False
        succeeded, failed = operations.result()
        self._statistics.record_operation_outcomes(succeeded=succeeded, failed=failed)
        return True
