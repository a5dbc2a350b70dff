"""Session Protocol — structural interface for an established endpoint session."""

from typing import Protocol


class Session(Protocol):
    """One established, bidirectional connection to the target.

    Owned by exactly one scheduler unit. ``close()`` must be called exactly
    once per created session; implementations treat repeated calls as no-ops.
    """

    @property
    def label(self) -> str: ...

    async def invoke_operation(self, timeout_seconds: float) -> None: ...

    async def close(self) -> None: ...
