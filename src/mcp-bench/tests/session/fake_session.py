"""FakeSession — in-memory Session implementation for use in tests."""

import asyncio

from mcp_bench.session.infrastructure.errors import OperationFailedError


class FakeSession:
    """Satisfies the Session protocol. Records every invocation and close.

    ``resolved`` counts operations that ran to completion (successfully or
    not); an operation cancelled during ``operation_delay`` is not resolved.
    """

    def __init__(
        self,
        label: str,
        fail_operations: bool = False,
        operation_delay: float = 0.0,
        close_error: Exception | None = None,
    ) -> None:
        self._label = label
        self._fail_operations = fail_operations
        self._operation_delay = operation_delay
        self._close_error = close_error
        self.invocations = 0
        self.resolved = 0
        self.close_calls = 0
        self.used_after_close = False

    @property
    def label(self) -> str:
        return self._label

    async def invoke_operation(self, timeout_seconds: float) -> None:
        if self.close_calls:
            self.used_after_close = True
        self.invocations += 1
        if self._operation_delay:
            await asyncio.sleep(self._operation_delay)
        self.resolved += 1
        if self._fail_operations:
            raise OperationFailedError(label=self._label, reason="tools/list errored")

    async def close(self) -> None:
        self.close_calls += 1
        if self._close_error is not None:
            raise self._close_error
