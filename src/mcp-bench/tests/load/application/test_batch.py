"""Tests for BatchBuilder."""

import pytest

from mcp_bench.core.cancellation import CancellationToken
from mcp_bench.load.application.batch import BatchBuilder
from mcp_bench.session.domain.session import Session
from mcp_bench.session.infrastructure.errors import SessionCreationError
from tests.load.fake_observer import FakeLoadObserver
from tests.session.fake_factory import FakeSessionFactory
from tests.session.fake_session import FakeSession


def _builder(
    factory: FakeSessionFactory,
    observer: FakeLoadObserver | None = None,
    cancellation: CancellationToken | None = None,
) -> BatchBuilder:
    return BatchBuilder(
        session_factory=factory,
        cancellation=cancellation or CancellationToken(),
        observer=observer or FakeLoadObserver(),
    )


class TestCreateBatch:
    async def test_creates_distinct_sessions(self) -> None:
        factory = FakeSessionFactory()
        created: list[Session] = []

        batch = await _builder(factory).create_batch(size=4, created=created)

        assert len(batch) == 4
        assert len({session.label for session in batch}) == 4
        assert created == batch

    async def test_labels_continue_across_batches(self) -> None:
        factory = FakeSessionFactory()
        builder = _builder(factory)
        await builder.create_batch(size=2, created=[])
        await builder.create_batch(size=2, created=[])

        assert factory.calls == ["client-0", "client-1", "client-2", "client-3"]

    async def test_creations_run_concurrently(self) -> None:
        factory = FakeSessionFactory(create_delay=0.02)
        await _builder(factory).create_batch(size=5, created=[])

        assert factory.peak_in_flight == 5

    async def test_fails_fast_and_keeps_created_sessions(self) -> None:
        factory = FakeSessionFactory(fail_calls={0})
        created: list[Session] = []

        with pytest.raises(SessionCreationError):
            await _builder(factory).create_batch(size=5, created=created)

        assert {id(s) for s in created} == {id(s) for s in factory.sessions}
        assert len(created) < 5


class TestCreatePool:
    async def test_splits_into_batches_with_smaller_final_batch(self) -> None:
        factory = FakeSessionFactory(create_delay=0.01)
        observer = FakeLoadObserver()

        pool = await _builder(factory, observer=observer).create_pool(
            total=12, width=5, created=[]
        )

        assert len(pool) == 12
        assert [event.batch_size for event in observer.pool_batches] == [5, 5, 2]
        assert all(event.total_batches == 3 for event in observer.pool_batches)
        assert factory.peak_in_flight <= 5

    async def test_exact_multiple_has_no_remainder_batch(self) -> None:
        observer = FakeLoadObserver()
        await _builder(FakeSessionFactory(), observer=observer).create_pool(
            total=10, width=5, created=[]
        )

        assert [event.batch_size for event in observer.pool_batches] == [5, 5]

    async def test_stops_when_cancelled(self) -> None:
        factory = FakeSessionFactory()
        cancellation = CancellationToken()
        cancellation.cancel()

        pool = await _builder(factory, cancellation=cancellation).create_pool(
            total=10, width=5, created=[]
        )

        assert pool == []
        assert factory.calls == []

    async def test_failure_in_later_batch_keeps_earlier_sessions(self) -> None:
        factory = FakeSessionFactory(fail_calls={7})
        created: list[Session] = []

        with pytest.raises(SessionCreationError):
            await _builder(factory).create_pool(total=10, width=5, created=created)

        assert len(created) >= 5


class TestInvokeAll:
    async def test_classifies_each_outcome(self) -> None:
        observer = FakeLoadObserver()
        sessions: list[Session] = [
            FakeSession(label="client-0"),
            FakeSession(label="client-1", fail_operations=True),
            FakeSession(label="client-2"),
        ]

        succeeded, failed = await _builder(
            FakeSessionFactory(), observer=observer
        ).invoke_all(sessions=sessions, timeout_seconds=1)

        assert (succeeded, failed) == (2, 1)
        assert [event.label for event in observer.operations_failed] == ["client-1"]
        assert sorted(observer.operations_succeeded) == ["client-0", "client-2"]

    async def test_every_session_invoked_once(self) -> None:
        sessions = [FakeSession(label=f"client-{i}") for i in range(3)]
        await _builder(FakeSessionFactory()).invoke_all(
            sessions=list(sessions), timeout_seconds=1
        )

        assert [session.invocations for session in sessions] == [1, 1, 1]


class TestCloseAll:
    async def test_close_failure_does_not_stop_other_closes(self) -> None:
        observer = FakeLoadObserver()
        sessions = [
            FakeSession(label="client-0"),
            FakeSession(label="client-1", close_error=RuntimeError("reset")),
            FakeSession(label="client-2"),
        ]

        failures = await _builder(FakeSessionFactory(), observer=observer).close_all(
            sessions=list(sessions)
        )

        assert failures == 1
        assert [session.close_calls for session in sessions] == [1, 1, 1]
        assert observer.close_failures[0].label == "client-1"
        assert "reset" in observer.close_failures[0].reason

    async def test_empty_list(self) -> None:
        assert await _builder(FakeSessionFactory()).close_all(sessions=[]) == 0
