"""FakeLoadObserver — records load domain events for assertion in tests."""

from dataclasses import dataclass

from mcp_bench.load.domain.observer import SettingValue
from mcp_bench.load.domain.summary import RunSummary


@dataclass(frozen=True)
class RunStartedEvent:
    mode: str
    target: str
    transport: str
    clients: int
    settings: dict[str, SettingValue]


@dataclass(frozen=True)
class ShutdownRequestedEvent:
    signal_name: str
    repeated: bool


@dataclass(frozen=True)
class PoolBatchCreatedEvent:
    batch_number: int
    total_batches: int
    batch_size: int


@dataclass(frozen=True)
class PoolFailedEvent:
    created: int
    reason: str


@dataclass(frozen=True)
class OperationFailedEvent:
    label: str
    reason: str


@dataclass(frozen=True)
class SustainedProgressEvent:
    completed: int
    failed: int
    ops_per_second: float


@dataclass(frozen=True)
class SessionsClosedEvent:
    total: int
    failed: int


@dataclass(frozen=True)
class SessionCloseFailedEvent:
    label: str
    reason: str


@dataclass(frozen=True)
class SwarmBatchEvent:
    batch_number: int
    sessions: int


@dataclass(frozen=True)
class SwarmBatchFailedEvent:
    batch_number: int
    created: int
    reason: str


@dataclass(frozen=True)
class SwarmProgressEvent:
    batches_completed: int
    clients_created: int
    completed: int
    failed: int
    ops_per_second: float
    elapsed_seconds: float


class FakeLoadObserver:
    """Records all emitted load events as typed frozen dataclasses.

    Use in tests to assert which events were emitted and with what data,
    without mocking or patching.
    """

    def __init__(self) -> None:
        self.started: list[RunStartedEvent] = []
        self.completed: list[RunSummary] = []
        self.shutdowns: list[ShutdownRequestedEvent] = []
        self.close_failures: list[SessionCloseFailedEvent] = []
        self.pool_batches: list[PoolBatchCreatedEvent] = []
        self.pool_ready_sizes: list[int] = []
        self.pool_failures: list[PoolFailedEvent] = []
        self.operations_succeeded: list[str] = []
        self.operations_failed: list[OperationFailedEvent] = []
        self.ticks_skipped: list[str] = []
        self.sustained_progress_events: list[SustainedProgressEvent] = []
        self.closing_totals: list[int] = []
        self.closed: list[SessionsClosedEvent] = []
        self.swarm_started: list[SwarmBatchEvent] = []
        self.swarm_operations: list[SwarmBatchEvent] = []
        self.swarm_closing: list[SwarmBatchEvent] = []
        self.swarm_failures: list[SwarmBatchFailedEvent] = []
        self.swarm_progress_events: list[SwarmProgressEvent] = []

    def run_started(
        self,
        mode: str,
        target: str,
        transport: str,
        clients: int,
        settings: dict[str, SettingValue],
    ) -> None:
        self.started.append(
            RunStartedEvent(
                mode=mode,
                target=target,
                transport=transport,
                clients=clients,
                settings=settings,
            )
        )

    def run_completed(self, summary: RunSummary) -> None:
        self.completed.append(summary)

    def shutdown_requested(self, signal_name: str, repeated: bool) -> None:
        self.shutdowns.append(
            ShutdownRequestedEvent(signal_name=signal_name, repeated=repeated)
        )

    def session_close_failed(self, label: str, reason: str) -> None:
        self.close_failures.append(SessionCloseFailedEvent(label=label, reason=reason))

    def pool_batch_created(
        self, batch_number: int, total_batches: int, batch_size: int
    ) -> None:
        self.pool_batches.append(
            PoolBatchCreatedEvent(
                batch_number=batch_number,
                total_batches=total_batches,
                batch_size=batch_size,
            )
        )

    def pool_ready(self, pool_size: int) -> None:
        self.pool_ready_sizes.append(pool_size)

    def pool_failed(self, created: int, reason: str) -> None:
        self.pool_failures.append(PoolFailedEvent(created=created, reason=reason))

    def operation_succeeded(self, label: str) -> None:
        self.operations_succeeded.append(label)

    def operation_failed(self, label: str, reason: str) -> None:
        self.operations_failed.append(OperationFailedEvent(label=label, reason=reason))

    def tick_skipped(self, label: str) -> None:
        self.ticks_skipped.append(label)

    def sustained_progress(
        self, completed: int, failed: int, ops_per_second: float
    ) -> None:
        self.sustained_progress_events.append(
            SustainedProgressEvent(
                completed=completed, failed=failed, ops_per_second=ops_per_second
            )
        )

    def sessions_closing(self, total: int) -> None:
        self.closing_totals.append(total)

    def sessions_closed(self, total: int, failed: int) -> None:
        self.closed.append(SessionsClosedEvent(total=total, failed=failed))

    def swarm_batch_started(self, batch_number: int, batch_size: int) -> None:
        self.swarm_started.append(
            SwarmBatchEvent(batch_number=batch_number, sessions=batch_size)
        )

    def swarm_operations_started(self, batch_number: int, sessions: int) -> None:
        self.swarm_operations.append(
            SwarmBatchEvent(batch_number=batch_number, sessions=sessions)
        )

    def swarm_batch_closing(self, batch_number: int, sessions: int) -> None:
        self.swarm_closing.append(
            SwarmBatchEvent(batch_number=batch_number, sessions=sessions)
        )

    def swarm_batch_failed(self, batch_number: int, created: int, reason: str) -> None:
        self.swarm_failures.append(
            SwarmBatchFailedEvent(
                batch_number=batch_number, created=created, reason=reason
            )
        )

    def swarm_progress(
        self,
        batches_completed: int,
        clients_created: int,
        completed: int,
        failed: int,
        ops_per_second: float,
        elapsed_seconds: float,
    ) -> None:
        self.swarm_progress_events.append(
            SwarmProgressEvent(
                batches_completed=batches_completed,
                clients_created=clients_created,
                completed=completed,
                failed=failed,
                ops_per_second=ops_per_second,
                elapsed_seconds=elapsed_seconds,
            )
        )
