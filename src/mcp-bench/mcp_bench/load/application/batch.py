"""BatchBuilder — concurrent session creation, best-effort operations, barrier close."""

import asyncio

from mcp_bench.core.cancellation import CancellationToken
from mcp_bench.core.errors import McpBenchError
from mcp_bench.load.domain.observer import LoadObserver
from mcp_bench.session.domain.factory import SessionFactory
from mcp_bench.session.domain.session import Session


class BatchBuilder:
    """Creates, exercises and disposes of groups of sessions concurrently.

    Sessions are never owned by the builder: every session it creates is handed
    to the caller-supplied ``created`` list the moment it is established, so a
    caller hit by a partial-batch failure still holds everything it must close.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        cancellation: CancellationToken,
        observer: LoadObserver,
    ) -> None:
        self._session_factory = session_factory
        self._cancellation = cancellation
        self._observer = observer
        self._next_index = 0

    async def create_batch(self, size: int, created: list[Session]) -> list[Session]:
        """Create ``size`` sessions concurrently, failing fast.

        The first creation error cancels the in-flight siblings and is re-raised
        unwrapped. Sessions established before the failure remain in ``created``.

        Raises:
            SessionCreationError: if any creation exhausts its retries.
            SessionCreationCancelledError: if the run is cancelled mid-creation.
        """
        batch: list[Session] = []
        try:
            async with asyncio.TaskGroup() as tg:
                for _ in range(size):
                    label = self._allocate_label()
                    tg.create_task(
                        self._create_one(label=label, sinks=(batch, created)),
                        name=f"create:{label}",
                    )
        except* McpBenchError as eg:
            raise eg.exceptions[0]
        return batch

    async def create_pool(
        self, total: int, width: int, created: list[Session]
    ) -> list[Session]:
        """Create ``total`` sessions in sequential batches of at most ``width``.

        ``total`` not divisible by ``width`` ends with a smaller final batch
        (12 with width 5 → 5, 5, 2). Stops early, without error, once the run is
        cancelled; the returned list then holds fewer than ``total`` sessions.
        """
        pool: list[Session] = []
        sizes = [width] * (total // width)
        if total % width:
            sizes.append(total % width)

        for batch_number, size in enumerate(sizes, start=1):
            if self._cancellation.cancelled:
                break
            pool.extend(await self.create_batch(size=size, created=created))
            self._observer.pool_batch_created(
                batch_number=batch_number,
                total_batches=len(sizes),
                batch_size=size,
            )
        return pool

    async def invoke_all(
        self, sessions: list[Session], timeout_seconds: float
    ) -> tuple[int, int]:
        """Issue one operation per session; classify each outcome independently.

        A failing session never aborts its siblings. Returns (succeeded, failed).
        """
        results = await asyncio.gather(
            *(s.invoke_operation(timeout_seconds=timeout_seconds) for s in sessions),
            return_exceptions=True,
        )
        succeeded = 0
        failed = 0
        for session, result in zip(sessions, results, strict=True):
            if isinstance(result, Exception):
                failed += 1
                self._observer.operation_failed(label=session.label, reason=str(result))
            elif isinstance(result, BaseException):
                raise result
            else:
                succeeded += 1
                self._observer.operation_succeeded(label=session.label)
        return succeeded, failed

    async def close_all(self, sessions: list[Session]) -> int:
        """Close every session concurrently behind an exception barrier.

        A failure to close one session never prevents closing the others.
        Returns the number of close failures.
        """
        results = await asyncio.gather(
            *(s.close() for s in sessions),
            return_exceptions=True,
        )
        failures = 0
        for session, result in zip(sessions, results, strict=True):
            if isinstance(result, Exception):
                failures += 1
                self._observer.session_close_failed(
                    label=session.label, reason=repr(result)
                )
        return failures

    def _allocate_label(self) -> str:
        label = f"client-{self._next_index}"
        self._next_index += 1
        return label

    async def _create_one(self, label: str, sinks: tuple[list[Session], ...]) -> None:
        session = await self._session_factory.create(label=label)
        for sink in sinks:
            sink.append(session)
