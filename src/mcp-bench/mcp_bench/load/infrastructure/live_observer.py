"""LiveLoadObserver — renders a live Rich status panel to stderr while load runs."""

from __future__ import annotations

import time

from rich.console import Console, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mcp_bench.load.domain.observer import SettingValue
from mcp_bench.load.domain.summary import RunSummary


class _StatusPanel:
    """Mutable counters rendered on every Live refresh via ``__rich__``."""

    def __init__(self, mode: str, target: str) -> None:
        self.mode = mode
        self.target = target
        self.phase = "starting"
        self.started_at = time.monotonic()
        self.sessions_open = 0
        self.completed = 0
        self.failed = 0
        self.skipped = 0
        self.batches = 0
        self.batches_failed = 0
        self.close_failures = 0

    def __rich__(self) -> RenderableType:
        elapsed = time.monotonic() - self.started_at
        rate = self.completed / elapsed if elapsed > 0 else 0.0

        table = Table.grid(padding=(0, 2))
        table.add_column(style="dim")
        table.add_column(style="bold")
        table.add_row("Phase", self.phase)
        table.add_row("Open sessions", str(self.sessions_open))
        table.add_row("Operations ok", f"[green]{self.completed}[/green]")
        table.add_row("Operations failed", f"[red]{self.failed}[/red]")
        if self.skipped:
            table.add_row("Ticks skipped", f"[yellow]{self.skipped}[/yellow]")
        if self.mode == "swarm":
            table.add_row("Batches", str(self.batches))
            table.add_row("Batches failed", str(self.batches_failed))
        if self.close_failures:
            table.add_row("Close failures", f"[red]{self.close_failures}[/red]")
        table.add_row("Throughput", f"{rate:.2f} ops/s")
        table.add_row("Elapsed", f"{elapsed:.1f}s")
        return Panel(table, title=f"mcp-bench · {self.mode} · {self.target}")


class LiveLoadObserver:
    """Shows run counters in a Rich ``Live`` panel on stderr.

    Only counter-bearing events update the panel; the rest are no-ops. The
    observer is itself the ``Live`` renderable. Pass ``disabled=True`` to track
    counters without any terminal output (useful in tests).

    Does NOT inherit from LoadObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self._panel: _StatusPanel | None = None
        self._live: Live | None = None

    def __rich__(self) -> RenderableType:
        if self._panel is None:
            return Text("")
        return self._panel.__rich__()

    def run_started(
        self,
        mode: str,
        target: str,
        transport: str,
        clients: int,
        settings: dict[str, SettingValue],
    ) -> None:
        self._panel = _StatusPanel(mode=mode, target=target)
        self._panel.phase = "creating sessions"
        if self._disabled:
            return
        console = Console(stderr=True)
        self._live = Live(self, console=console, refresh_per_second=4)
        self._live.start()

    def run_completed(self, summary: RunSummary) -> None:
        if self._panel is not None:
            self._panel.phase = "done"
            self._panel.completed = summary.operations_completed
            self._panel.failed = summary.operations_failed
        if self._live is not None:
            self._live.stop()
        self._live = None

    def shutdown_requested(self, signal_name: str, repeated: bool) -> None:
        if self._panel is not None and not repeated:
            self._panel.phase = f"stopping ({signal_name})"

    def session_close_failed(self, label: str, reason: str) -> None:
        if self._panel is not None:
            self._panel.close_failures += 1

    def pool_batch_created(
        self, batch_number: int, total_batches: int, batch_size: int
    ) -> None:
        if self._panel is not None:
            self._panel.sessions_open += batch_size
            self._panel.phase = f"creating sessions ({batch_number}/{total_batches})"

    def pool_ready(self, pool_size: int) -> None:
        if self._panel is not None:
            self._panel.sessions_open = pool_size
            self._panel.phase = "running"
            self._panel.started_at = time.monotonic()

    def pool_failed(self, created: int, reason: str) -> None:
        if self._panel is not None:
            self._panel.phase = "pool construction failed"
        if self._live is not None:
            self._live.stop()
        self._live = None

    def operation_succeeded(self, label: str) -> None:
        if self._panel is not None:
            self._panel.completed += 1

    def operation_failed(self, label: str, reason: str) -> None:
        if self._panel is not None:
            self._panel.failed += 1

    def tick_skipped(self, label: str) -> None:
        if self._panel is not None:
            self._panel.skipped += 1

    def sustained_progress(
        self, completed: int, failed: int, ops_per_second: float
    ) -> None:
        pass

    def sessions_closing(self, total: int) -> None:
        if self._panel is not None:
            self._panel.phase = f"closing {total} sessions"

    def sessions_closed(self, total: int, failed: int) -> None:
        if self._panel is not None:
            self._panel.sessions_open = 0

    def swarm_batch_started(self, batch_number: int, batch_size: int) -> None:
        if self._panel is not None:
            self._panel.phase = f"batch #{batch_number}: creating {batch_size}"

    def swarm_operations_started(self, batch_number: int, sessions: int) -> None:
        if self._panel is not None:
            self._panel.sessions_open = sessions
            self._panel.phase = f"batch #{batch_number}: listing tools"

    def swarm_batch_closing(self, batch_number: int, sessions: int) -> None:
        if self._panel is not None:
            self._panel.sessions_open = 0
            self._panel.phase = f"batch #{batch_number}: closing"
            self._panel.batches = batch_number - self._panel.batches_failed

    def swarm_batch_failed(self, batch_number: int, created: int, reason: str) -> None:
        if self._panel is not None:
            self._panel.batches_failed += 1

    def swarm_progress(
        self,
        batches_completed: int,
        clients_created: int,
        completed: int,
        failed: int,
        ops_per_second: float,
        elapsed_seconds: float,
    ) -> None:
        if self._panel is not None:
            self._panel.batches = batches_completed
