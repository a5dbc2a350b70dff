"""StructlogLoadObserver — production observer that delegates to structlog."""

import structlog

from mcp_bench.load.domain.observer import SettingValue
from mcp_bench.load.domain.summary import RunSummary


class StructlogLoadObserver:
    """Logs load domain events to structlog.

    Does NOT inherit from LoadObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def run_started(
        self,
        mode: str,
        target: str,
        transport: str,
        clients: int,
        settings: dict[str, SettingValue],
    ) -> None:
        self._log.info(
            "run.started",
            mode=mode,
            target=target,
            transport=transport,
            clients=clients,
            **settings,
        )

    def run_completed(self, summary: RunSummary) -> None:
        self._log.info(
            "run.completed",
            mode=summary.mode,
            operations_completed=summary.operations_completed,
            operations_failed=summary.operations_failed,
            operations_total=summary.operations_total,
            operations_skipped=summary.operations_skipped,
            batches_completed=summary.batches_completed,
            clients_created=summary.clients_created,
            ops_per_second=round(summary.operations_per_second, 2),
            elapsed_seconds=round(summary.elapsed_seconds, 2),
        )

    def shutdown_requested(self, signal_name: str, repeated: bool) -> None:
        if repeated:
            self._log.info("run.shutdown.ignored", signal=signal_name)
            return
        self._log.info("run.shutdown.requested", signal=signal_name)

    def session_close_failed(self, label: str, reason: str) -> None:
        self._log.error("session.close.failed", label=label, reason=reason)

    def pool_batch_created(
        self, batch_number: int, total_batches: int, batch_size: int
    ) -> None:
        self._log.info(
            "load.pool.batch_created",
            batch=f"{batch_number}/{total_batches}",
            batch_size=batch_size,
        )

    def pool_ready(self, pool_size: int) -> None:
        self._log.info("load.pool.ready", pool_size=pool_size)

    def pool_failed(self, created: int, reason: str) -> None:
        self._log.error("load.pool.failed", created=created, reason=reason)

    def operation_succeeded(self, label: str) -> None:
        self._log.debug("load.operation.succeeded", label=label)

    def operation_failed(self, label: str, reason: str) -> None:
        self._log.error("load.operation.failed", label=label, reason=reason)

    def tick_skipped(self, label: str) -> None:
        self._log.debug("load.tick.skipped", label=label)

    def sustained_progress(
        self, completed: int, failed: int, ops_per_second: float
    ) -> None:
        self._log.info(
            "load.sustained.progress",
            completed=completed,
            failed=failed,
            ops_per_second=round(ops_per_second, 2),
        )

    def sessions_closing(self, total: int) -> None:
        self._log.info("load.sessions.closing", total=total)

    def sessions_closed(self, total: int, failed: int) -> None:
        if failed:
            self._log.error("load.sessions.closed", total=total, failed=failed)
            return
        self._log.info("load.sessions.closed", total=total, failed=failed)

    def swarm_batch_started(self, batch_number: int, batch_size: int) -> None:
        self._log.info("load.swarm.batch_started", batch=batch_number, size=batch_size)

    def swarm_operations_started(self, batch_number: int, sessions: int) -> None:
        self._log.info(
            "load.swarm.operations_started", batch=batch_number, sessions=sessions
        )

    def swarm_batch_closing(self, batch_number: int, sessions: int) -> None:
        self._log.info("load.swarm.batch_closing", batch=batch_number, sessions=sessions)

    def swarm_batch_failed(self, batch_number: int, created: int, reason: str) -> None:
        self._log.error(
            "load.swarm.batch_failed",
            batch=batch_number,
            created=created,
            reason=reason,
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
        self._log.info(
            "load.swarm.progress",
            batches_completed=batches_completed,
            clients_created=clients_created,
            completed=completed,
            failed=failed,
            ops_per_second=round(ops_per_second, 2),
            elapsed_seconds=round(elapsed_seconds, 2),
        )
