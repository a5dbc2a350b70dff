"""CancellationToken — the single stop signal shared by every scheduling loop."""

import asyncio
import contextlib


class CancellationToken:
    """Idempotent stop flag with cancellable waiting primitives.

    Signal handlers only call ``cancel()``; every loop, ticker and retry delay
    checks the token before issuing new work.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> bool:
        """Flip the token. Returns False if it was already cancelled."""
        if self._event.is_set():
            return False
        self._event.set()
        return True

    async def wait(self) -> None:
        await self._event.wait()

    async def sleep(self, seconds: float) -> bool:
        """Sleep for ``seconds`` unless cancelled first.

        Returns True if the full delay elapsed, False if the token fired.
        """
        if self._event.is_set():
            return False
        try:
            await asyncio.wait_for(self._event.wait(), timeout=max(seconds, 0.0))
        except TimeoutError:
            return True
        return False

    async def race(self, task: asyncio.Task[object]) -> bool:
        """Await ``task`` unless the token fires first.

        Returns True if the task finished. On cancellation the task is
        cancelled and awaited before returning False.
        """
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
        if task.done():
            return True
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        return False
