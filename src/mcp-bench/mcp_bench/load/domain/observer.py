"""Observer port for the load domain — defines events in domain language."""

from typing import Protocol

from mcp_bench.load.domain.summary import RunSummary

type SettingValue = str | int | float


class LoadObserver(Protocol):
    """Observer port emitting structured events while load is generated.

    Implementations may log to structlog, render a live panel, or record for
    tests. Progress cadence is owned by the schedulers: every 100 completed
    operations in normal mode, every 5 batches in swarm mode.
    """

    def run_started(
        self,
        mode: str,
        target: str,
        transport: str,
        clients: int,
        settings: dict[str, SettingValue],
    ) -> None: ...

    def run_completed(self, summary: RunSummary) -> None: ...

    def shutdown_requested(self, signal_name: str, repeated: bool) -> None: ...

    def session_close_failed(self, label: str, reason: str) -> None: ...

    # Normal mode -------------------------------------------------------

    def pool_batch_created(
        self, batch_number: int, total_batches: int, batch_size: int
    ) -> None: ...

    def pool_ready(self, pool_size: int) -> None: ...

    def pool_failed(self, created: int, reason: str) -> None: ...

    def operation_succeeded(self, label: str) -> None: ...

    def operation_failed(self, label: str, reason: str) -> None: ...

    def tick_skipped(self, label: str) -> None: ...

    def sustained_progress(
        self, completed: int, failed: int, ops_per_second: float
    ) -> None: ...

    def sessions_closing(self, total: int) -> None: ...

    def sessions_closed(self, total: int, failed: int) -> None: ...

    # Swarm mode --------------------------------------------------------

    def swarm_batch_started(self, batch_number: int, batch_size: int) -> None: ...

    def swarm_operations_started(self, batch_number: int, sessions: int) -> None: ...

    def swarm_batch_closing(self, batch_number: int, sessions: int) -> None: ...

    def swarm_batch_failed(self, batch_number: int, created: int, reason: str) -> None: ...

    def swarm_progress(
        self,
        batches_completed: int,
        clients_created: int,
        completed: int,
        failed: int,
        ops_per_second: float,
        elapsed_seconds: float,
    ) -> None: ...
