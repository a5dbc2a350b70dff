"""CLI entrypoint for mcp-bench — typer app with a `run` command."""

import asyncio
import logging
import signal
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import structlog
import typer

from mcp_bench.cli.output.summary import print_summary
from mcp_bench.config.domain.config import BenchConfig
from mcp_bench.config.infrastructure.observer import StructlogConfigObserver
from mcp_bench.config.infrastructure.yaml_loader import YamlConfigLoader, build_config
from mcp_bench.core.cancellation import CancellationToken
from mcp_bench.core.errors import McpBenchError
from mcp_bench.load.application.supervisor import RunSupervisor
from mcp_bench.load.domain.observer import LoadObserver
from mcp_bench.load.domain.summary import RunSummary
from mcp_bench.load.infrastructure.composite_observer import CompositeLoadObserver
from mcp_bench.load.infrastructure.live_observer import LiveLoadObserver
from mcp_bench.load.infrastructure.observer import StructlogLoadObserver
from mcp_bench.session.infrastructure.observer import StructlogSessionObserver
from mcp_bench.session.infrastructure.registry import create_session_factory

app = typer.Typer(add_completion=False)


@app.callback()
def main() -> None:
    """Load-test an MCP server with many concurrent client sessions."""


def _configure_structlog(log_format: str, verbose: bool) -> None:
    """Configure structlog based on the requested format and verbosity."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


def _load_config(config_path: Path | None, overrides: dict[str, Any]) -> BenchConfig:
    """Build the BenchConfig from an optional input file plus CLI overrides."""
    observer = StructlogConfigObserver()
    if config_path is not None:
        return YamlConfigLoader(observer=observer).load(
            path=config_path, overrides=overrides
        )
    return build_config(raw={}, overrides=overrides, observer=observer, source="cli")


def _build_observer(log_format: str) -> LoadObserver:
    observers: list[LoadObserver] = [StructlogLoadObserver()]
    if log_format != "json" and sys.stderr.isatty():
        observers.append(LiveLoadObserver())
    return CompositeLoadObserver(observers=observers)


@contextmanager
def _ignoring_stop_signals() -> Iterator[None]:
    """Ignore SIGINT and SIGTERM while the final summary is printed."""
    previous = {
        sig: signal.signal(sig, signal.SIG_IGN)
        for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)


async def _execute(config: BenchConfig, observer: LoadObserver) -> RunSummary:
    cancellation = CancellationToken()
    session_factory = create_session_factory(
        config=config,
        cancellation=cancellation,
        observer=StructlogSessionObserver(),
    )
    supervisor = RunSupervisor(
        config=config,
        session_factory=session_factory,
        cancellation=cancellation,
        observer=observer,
    )
    return await supervisor.run()


@app.command()
def run(
    target: str | None = typer.Option(
        None, "--target", "-t", help="Target MCP server URL"
    ),
    sse: bool | None = typer.Option(
        None, "--sse/--no-sse", help="Use the SSE transport instead of streamable HTTP"
    ),
    clients: int | None = typer.Option(
        None,
        "--clients",
        "-c",
        help=(
            "Normal mode: total concurrent sessions to maintain. "
            "Swarm mode: sessions created in each batch. [default: 10]"
        ),
    ),
    clients_creation_batch_size: int | None = typer.Option(
        None,
        "--clients-creation-batch-size",
        help="Normal mode: sessions created per ramp-up batch. [default: 5]",
    ),
    ops_rate: float | None = typer.Option(
        None,
        "--ops-rate",
        "-r",
        help="Normal mode: operations (list tools) per minute per session. [default: 60]",
    ),
    max_retries: int | None = typer.Option(
        None, "--max-retries", help="Maximum session-creation retries. [default: 3]"
    ),
    initial_backoff_ms: float | None = typer.Option(
        None, "--initial-backoff-ms", help="Initial backoff in ms. [default: 100]"
    ),
    max_backoff_ms: float | None = typer.Option(
        None, "--max-backoff-ms", help="Maximum backoff in ms. [default: 10000]"
    ),
    backoff_factor: float | None = typer.Option(
        None, "--backoff-factor", help="Backoff multiplier. [default: 2]"
    ),
    mode: str | None = typer.Option(
        None,
        "--mode",
        help=(
            "'normal' (persistent sessions sending operations continuously) or "
            "'swarm' (constantly creating and closing sessions). [default: normal]"
        ),
    ),
    swarm_interval: int | None = typer.Option(
        None,
        "--swarm-interval",
        help="Swarm mode: ms to wait between batches. [default: 5000]",
    ),
    max_batches: int | None = typer.Option(
        None, "--max-batches", help="Swarm mode: stop after this many batches."
    ),
    operation_timeout: float | None = typer.Option(
        None,
        "--operation-timeout",
        help="Seconds before an operation counts as failed. [default: 60]",
    ),
    tick_overlap: str | None = typer.Option(
        None,
        "--tick-overlap",
        help=(
            "Normal mode: 'allow' overlapping operations on one session or "
            "'skip' a tick while the previous operation is in flight. [default: allow]"
        ),
    ),
    duration: float | None = typer.Option(
        None, "--duration", help="Stop gracefully after this many seconds."
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        envvar=["MCP_BENCH_TOKEN", "APIFY_TOKEN"],
        help="Bearer token sent with every request.",
        show_envvar=True,
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-f",
        help="YAML or JSON input file; command-line options override its values.",
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every operation and session event."
    ),
) -> None:
    """Run a load benchmark against an MCP server until interrupted."""
    _configure_structlog(log_format=log_format, verbose=verbose)

    candidates: dict[str, Any] = {
        "target": target,
        "sse": sse,
        "clients": clients,
        "clients_creation_batch_size": clients_creation_batch_size,
        "ops_rate": ops_rate,
        "max_retries": max_retries,
        "initial_backoff_ms": initial_backoff_ms,
        "max_backoff_ms": max_backoff_ms,
        "backoff_factor": backoff_factor,
        "mode": mode,
        "swarm_interval_ms": swarm_interval,
        "max_batches": max_batches,
        "operation_timeout_seconds": operation_timeout,
        "tick_overlap": tick_overlap,
        "duration_seconds": duration,
        "token": token,
    }
    overrides = {key: value for key, value in candidates.items() if value is not None}

    try:
        config = _load_config(config_path=config_path, overrides=overrides)
        summary = asyncio.run(
            _execute(config=config, observer=_build_observer(log_format=log_format))
        )
    except KeyboardInterrupt:
        typer.echo("Benchmark interrupted.")
        sys.exit(0)
    except McpBenchError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)

    with _ignoring_stop_signals():
        print_summary(summary=summary, target=config.target)


if __name__ == "__main__":
    app()
