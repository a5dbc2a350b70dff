"""CompositeLoadObserver — fans out all events to a list of observers."""

from mcp_bench.load.domain.observer import LoadObserver, SettingValue
from mcp_bench.load.domain.summary import RunSummary


class CompositeLoadObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from LoadObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[LoadObserver]) -> None:
        self._observers = observers

    def run_started(
        self,
        mode: str,
        target: str,
        transport: str,
        clients: int,
        settings: dict[str, SettingValue],
    ) -> None:
        for obs in self._observers:
            obs.run_started(
                mode=mode,
                target=target,
                transport=transport,
                clients=clients,
                settings=settings,
            )

    def run_completed(self, summary: RunSummary) -> None:
        for obs in self._observers:
            obs.run_completed(summary=summary)

    def shutdown_requested(self, signal_name: str, repeated: bool) -> None:
        for obs in self._observers:
            obs.shutdown_requested(signal_name=signal_name, repeated=repeated)

    def session_close_failed(self, label: str, reason: str) -> None:
        for obs in self._observers:
            obs.session_close_failed(label=label, reason=reason)

    def pool_batch_created(
        self, batch_number: int, total_batches: int, batch_size: int
    ) -> None:
        for obs in self._observers:
            obs.pool_batch_created(
                batch_number=batch_number,
                total_batches=total_batches,
                batch_size=batch_size,
            )

    def pool_ready(self, pool_size: int) -> None:
        for obs in self._observers:
            obs.pool_ready(pool_size=pool_size)

    def pool_failed(self, created: int, reason: str) -> None:
        for obs in self._observers:
            obs.pool_failed(created=created, reason=reason)

    def operation_succeeded(self, label: str) -> None:
        for obs in self._observers:
            obs.operation_succeeded(label=label)

    def operation_failed(self, label: str, reason: str) -> None:
        for obs in self._observers:
            obs.operation_failed(label=label, reason=reason)

    def tick_skipped(self, label: str) -> None:
        for obs in self._observers:
            obs.tick_skipped(label=label)

    def sustained_progress(
        self, completed: int, failed: int, ops_per_second: float
    ) -> None:
        for obs in self._observers:
            obs.sustained_progress(
                completed=completed, failed=failed, ops_per_second=ops_per_second
            )

    def sessions_closing(self, total: int) -> None:
        for obs in self._observers:
            obs.sessions_closing(total=total)

    def sessions_closed(self, total: int, failed: int) -> None:
        for obs in self._observers:
            obs.sessions_closed(total=total, failed=failed)

    def swarm_batch_started(self, batch_number: int, batch_size: int) -> None:
        for obs in self._observers:
            obs.swarm_batch_started(batch_number=batch_number, batch_size=batch_size)

    def swarm_operations_started(self, batch_number: int, sessions: int) -> None:
        for obs in self._observers:
            obs.swarm_operations_started(batch_number=batch_number, sessions=sessions)

    def swarm_batch_closing(self, batch_number: int, sessions: int) -> None:
        for obs in self._observers:
            obs.swarm_batch_closing(batch_number=batch_number, sessions=sessions)

    def swarm_batch_failed(self, batch_number: int, created: int, reason: str) -> None:
        for obs in self._observers:
            obs.swarm_batch_failed(
                batch_number=batch_number, created=created, reason=reason
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
        for obs in self._observers:
            obs.swarm_progress(
                batches_completed=batches_completed,
                clients_created=clients_created,
                completed=completed,
                failed=failed,
                ops_per_second=ops_per_second,
                elapsed_seconds=elapsed_seconds,
            )
