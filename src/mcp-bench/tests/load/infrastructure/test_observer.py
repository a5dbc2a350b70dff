"""Tests for StructlogLoadObserver event names and fields."""

from collections.abc import Iterator

import pytest
import structlog
from structlog.testing import capture_logs

from mcp_bench.load.domain.summary import RunSummary
from mcp_bench.load.infrastructure.observer import StructlogLoadObserver


@pytest.fixture(autouse=True)
def _default_structlog() -> Iterator[None]:
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


class TestRunEvents:
    def test_run_started_splats_settings(self) -> None:
        with capture_logs() as logs:
            StructlogLoadObserver().run_started(
                mode="normal",
                target="http://localhost:3000/mcp",
                transport="sse",
                clients=4,
                settings={"ops_rate_per_minute": 60},
            )

        assert logs[0]["event"] == "run.started"
        assert logs[0]["transport"] == "sse"
        assert logs[0]["ops_rate_per_minute"] == 60

    def test_run_completed_rounds_rates(self) -> None:
        summary = RunSummary(
            mode="swarm",
            operations_completed=10,
            operations_failed=1,
            batches_completed=2,
            clients_created=10,
            elapsed_seconds=3,
        )
        with capture_logs() as logs:
            StructlogLoadObserver().run_completed(summary=summary)

        assert logs[0]["event"] == "run.completed"
        assert logs[0]["ops_per_second"] == 3.33
        assert logs[0]["batches_completed"] == 2
        assert logs[0]["operations_total"] == 11

    def test_repeated_shutdown_is_logged_as_ignored(self) -> None:
        observer = StructlogLoadObserver()
        with capture_logs() as logs:
            observer.shutdown_requested(signal_name="SIGINT", repeated=False)
            observer.shutdown_requested(signal_name="SIGINT", repeated=True)

        assert [entry["event"] for entry in logs] == [
            "run.shutdown.requested",
            "run.shutdown.ignored",
        ]


class TestLevels:
    def test_operation_failure_is_an_error(self) -> None:
        with capture_logs() as logs:
            StructlogLoadObserver().operation_failed(label="client-1", reason="boom")

        assert logs[0]["event"] == "load.operation.failed"
        assert logs[0]["log_level"] == "error"

    def test_operation_success_is_debug(self) -> None:
        with capture_logs() as logs:
            StructlogLoadObserver().operation_succeeded(label="client-1")

        assert logs[0]["log_level"] == "debug"

    def test_sessions_closed_with_failures_is_an_error(self) -> None:
        observer = StructlogLoadObserver()
        with capture_logs() as logs:
            observer.sessions_closed(total=3, failed=0)
            observer.sessions_closed(total=3, failed=1)

        assert [entry["log_level"] for entry in logs] == ["info", "error"]

    def test_pool_batch_progress_format(self) -> None:
        with capture_logs() as logs:
            StructlogLoadObserver().pool_batch_created(
                batch_number=2, total_batches=3, batch_size=5
            )

        assert logs[0]["event"] == "load.pool.batch_created"
        assert logs[0]["batch"] == "2/3"

    def test_swarm_progress(self) -> None:
        with capture_logs() as logs:
            StructlogLoadObserver().swarm_progress(
                batches_completed=5,
                clients_created=50,
                completed=49,
                failed=1,
                ops_per_second=1.23456,
                elapsed_seconds=40.0,
            )

        assert logs[0]["event"] == "load.swarm.progress"
        assert logs[0]["ops_per_second"] == 1.23
