"""RunSupervisor — selects the scheduler, wires the stop signal, reports the summary."""

import asyncio
import signal
from collections.abc import Iterator
from contextlib import contextmanager

from mcp_bench.config.domain.config import BenchConfig
from mcp_bench.core.cancellation import CancellationToken
from mcp_bench.load.application.batch import BatchBuilder
from mcp_bench.load.application.churn import ChurnLoadScheduler
from mcp_bench.load.application.sustained import SustainedLoadScheduler
from mcp_bench.load.domain.observer import LoadObserver, SettingValue
from mcp_bench.load.domain.statistics import RunStatistics
from mcp_bench.load.domain.summary import RunSummary
from mcp_bench.load.infrastructure.errors import UnknownModeError
from mcp_bench.session.domain.factory import SessionFactory

_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class RunSupervisor:
    """Runs one benchmark from start to graceful stop.

    The supervisor is free of transport dependencies: it receives a
    SessionFactory and a CancellationToken so that tests can drive it with
    fakes. Signal handlers only flip the token; the active scheduler performs
    all cleanup.
    """

    def __init__(
        self,
        config: BenchConfig,
        session_factory: SessionFactory,
        cancellation: CancellationToken,
        observer: LoadObserver,
        install_signal_handlers: bool = True,
    ) -> None:
        self._config = config
        self._session_factory = session_factory
        self._cancellation = cancellation
        self._observer = observer
        self._install_signal_handlers = install_signal_handlers

    def stop(self, reason: str = "manual") -> None:
        """Request a graceful stop. Repeated requests are ignored."""
        first = self._cancellation.cancel()
        self._observer.shutdown_requested(signal_name=reason, repeated=not first)

    async def run(self) -> RunSummary:
        """Execute the configured mode until stopped and return its summary.

        Raises:
            UnknownModeError: before any session is created, for an unknown mode.
            SessionCreationError: if normal-mode pool construction fails.
        """
        mode = self._config.mode
        if mode not in ("normal", "swarm"):
            raise UnknownModeError(mode=mode)

        self._observer.run_started(
            mode=mode,
            target=self._config.target,
            transport=self._config.transport,
            clients=self._config.clients,
            settings=self._mode_settings(),
        )

        statistics = RunStatistics(mode=mode)
        batch_builder = BatchBuilder(
            session_factory=self._session_factory,
            cancellation=self._cancellation,
            observer=self._observer,
        )
        scheduler: SustainedLoadScheduler | ChurnLoadScheduler
        if mode == "normal":
            scheduler = SustainedLoadScheduler(
                config=self._config,
                batch_builder=batch_builder,
                statistics=statistics,
                cancellation=self._cancellation,
                observer=self._observer,
            )
        else:
            scheduler = ChurnLoadScheduler(
                config=self._config,
                batch_builder=batch_builder,
                statistics=statistics,
                cancellation=self._cancellation,
                observer=self._observer,
            )

        with self._stop_wiring():
            summary = await scheduler.run()
            # Handlers stay installed so a late signal only counts as a repeated stop.
            self._observer.run_completed(summary=summary)
        return summary

    @contextmanager
    def _stop_wiring(self) -> Iterator[None]:
        """Install signal handlers and the optional duration timer for one run."""
        loop = asyncio.get_running_loop()
        installed: list[signal.Signals] = []
        if self._install_signal_handlers:
            for sig in _STOP_SIGNALS:
                try:
                    loop.add_signal_handler(sig, self.stop, sig.name)
                except (NotImplementedError, RuntimeError):
                    # Not supported off the main thread or on some platforms.
                    continue
                installed.append(sig)

        timer: asyncio.TimerHandle | None = None
        if self._config.duration_seconds is not None:
            timer = loop.call_later(
                self._config.duration_seconds, self.stop, "duration"
            )

        try:
            yield
        finally:
            if timer is not None:
                timer.cancel()
            for sig in installed:
                loop.remove_signal_handler(sig)

    def _mode_settings(self) -> dict[str, SettingValue]:
        retry = self._config.retry
        settings: dict[str, SettingValue] = {
            "max_retries": retry.max_retries,
            "initial_backoff_ms": retry.initial_backoff_ms,
            "max_backoff_ms": retry.max_backoff_ms,
            "backoff_factor": retry.backoff_factor,
            "operation_timeout_seconds": self._config.operation_timeout_seconds,
        }
        if self._config.mode == "normal":
            settings["clients_creation_batch_size"] = (
                self._config.clients_creation_batch_size
            )
            settings["ops_rate_per_minute"] = self._config.ops_rate
            settings["tick_overlap"] = self._config.tick_overlap
        else:
            settings["swarm_interval_ms"] = self._config.swarm_interval_ms
            if self._config.max_batches is not None:
                settings["max_batches"] = self._config.max_batches
        if self._config.duration_seconds is not None:
            settings["duration_seconds"] = self._config.duration_seconds
        return settings
