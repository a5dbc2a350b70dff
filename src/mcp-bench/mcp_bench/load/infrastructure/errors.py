"""Error types raised while starting a load run."""

from mcp_bench.core.errors import McpBenchError


class UnknownModeError(McpBenchError):
    """Raised when the configured mode is neither 'normal' nor 'swarm'."""

    def __init__(self, mode: str) -> None:
        self.mode = mode
        super().__init__(f"Failed to start run: unknown mode '{mode}'")
