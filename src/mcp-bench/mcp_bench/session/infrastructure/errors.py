"""Error types raised by session infrastructure."""

from mcp_bench.core.errors import McpBenchError


class SessionCreationError(McpBenchError):
    """Raised when a session could not be established after exhausting all retries."""

    def __init__(self, label: str, attempts: int, reason: str) -> None:
        self.label = label
        self.attempts = attempts
        super().__init__(
            f"Failed to create session '{label}' after {attempts} attempts: {reason}"
        )


class SessionCreationCancelledError(McpBenchError):
    """Raised when the run is cancelled while a session is still being established."""

    def __init__(self, label: str, attempts: int) -> None:
        self.label = label
        self.attempts = attempts
        super().__init__(
            f"Failed to create session '{label}': run cancelled after {attempts} attempts"
        )


class OperationFailedError(McpBenchError):
    """Raised when a session operation errors or times out."""

    def __init__(self, label: str, reason: str) -> None:
        self.label = label
        super().__init__(f"Failed to list tools on session '{label}': {reason}")


class TransportNotSupportedError(McpBenchError):
    """Raised when the configured transport variant is not a known variant."""

    def __init__(self, transport: str) -> None:
        super().__init__(
            f"Failed to create session connector: unsupported transport '{transport}'"
        )
