"""RunStatistics — the only state shared by the concurrent units of one run."""

import time
from collections.abc import Callable

from mcp_bench.load.domain.summary import RunSummary


class RunStatistics:
    """Monotonic run counters, passed explicitly to schedulers and the supervisor.

    Every increment is a synchronous method call, so under the single asyncio
    loop no update can interleave with another and no lock is needed.
    """

    def __init__(self, mode: str, clock: Callable[[], float] = time.monotonic) -> None:
        self._mode = mode
        self._clock = clock
        self._started_at = clock()
        self._operations_completed = 0
        self._operations_failed = 0
        self._operations_skipped = 0
        self._batches_completed = 0
        self._clients_created = 0

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def operations_completed(self) -> int:
        return self._operations_completed

    @property
    def operations_failed(self) -> int:
        return self._operations_failed

    @property
    def operations_skipped(self) -> int:
        return self._operations_skipped

    @property
    def batches_completed(self) -> int:
        return self._batches_completed

    @property
    def clients_created(self) -> int:
        return self._clients_created

    @property
    def elapsed_seconds(self) -> float:
        return self._clock() - self._started_at

    def restart_clock(self) -> None:
        """Reset the start instant, e.g. once the normal-mode pool is ready."""
        self._started_at = self._clock()

    def record_operation_succeeded(self) -> int:
        """Count one successful operation and return the new completed total."""
        self._operations_completed += 1
        return self._operations_completed

    def record_operation_failed(self) -> None:
        self._operations_failed += 1

    def record_operation_outcomes(self, succeeded: int, failed: int) -> None:
        self._operations_completed += succeeded
        self._operations_failed += failed

    def record_operation_skipped(self) -> None:
        self._operations_skipped += 1

    def record_clients_created(self, count: int) -> None:
        self._clients_created += count

    def record_batch_completed(self) -> int:
        """Count one finished swarm batch and return the new batch total."""
        self._batches_completed += 1
        return self._batches_completed

    def snapshot(self) -> RunSummary:
        """Freeze the current counters into a RunSummary."""
        return RunSummary(
            mode=self._mode,
            operations_completed=self._operations_completed,
            operations_failed=self._operations_failed,
            operations_skipped=self._operations_skipped,
            batches_completed=self._batches_completed,
            clients_created=self._clients_created,
            elapsed_seconds=max(self.elapsed_seconds, 0.0),
        )
