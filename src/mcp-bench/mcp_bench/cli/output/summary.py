"""Human-readable end-of-run summary block, shared by both modes."""

import typer

from mcp_bench.load.domain.summary import RunSummary

# ---------------------------------------------------------------------------
# ANSI helpers
# ---------------------------------------------------------------------------
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_WHITE = "\033[97m"


def format_elapsed(elapsed_seconds: float) -> str:
    """Format elapsed seconds as '1m 23.4s' or '5.2s'."""
    minutes, seconds = divmod(elapsed_seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{elapsed_seconds:.1f}s"


def summary_rows(summary: RunSummary) -> list[tuple[str, str]]:
    """Return the (label, value) rows of the summary block, without colour."""
    rows: list[tuple[str, str]] = [("Mode", summary.mode)]
    if summary.mode == "swarm":
        rows.append(("Batches completed", str(summary.batches_completed)))
    rows.append(("Clients created", str(summary.clients_created)))
    rows.append(("Operations completed", str(summary.operations_completed)))
    rows.append(("Operations failed", str(summary.operations_failed)))
    if summary.operations_skipped:
        rows.append(("Ticks skipped", str(summary.operations_skipped)))
    if summary.mode == "swarm":
        rows.append(
            ("Client creation rate", f"{summary.clients_per_second:.2f} clients/sec")
        )
    rows.append(("Average throughput", f"{summary.operations_per_second:.2f} ops/sec"))
    rows.append(
        (
            "Total runtime",
            f"{summary.elapsed_seconds:.2f} seconds"
            f" ({format_elapsed(elapsed_seconds=summary.elapsed_seconds)})",
        )
    )
    return rows


def _rule(width: int = 60, color: str = _DIM) -> None:
    typer.echo(f"{color}{'─' * width}{_RESET}")


def print_summary(summary: RunSummary, target: str) -> None:
    """Print a colorized summary block to stdout."""
    typer.echo("")
    _rule(color=_CYAN)
    typer.echo(f"{_CYAN}{_BOLD}  mcp-bench  ·  Benchmark Summary{_RESET}")
    _rule(color=_CYAN)
    typer.echo(f"  {_DIM}Target{_RESET}  {_WHITE}{target}{_RESET}")
    typer.echo("")

    rows = summary_rows(summary=summary)
    label_w = max(len(label) for label, _ in rows)
    for label, value in rows:
        color = _WHITE
        if label == "Operations completed":
            color = _GREEN
        elif label == "Operations failed" and summary.operations_failed:
            color = _RED
        typer.echo(f"  {_DIM}{label:<{label_w}}{_RESET}  {color}{value}{_RESET}")

    typer.echo("")
    _rule(color=_CYAN)
    typer.echo("")
