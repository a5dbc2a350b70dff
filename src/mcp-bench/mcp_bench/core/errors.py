"""Base exception class for all mcp-bench-specific errors."""


class McpBenchError(Exception):
    """Base class for all mcp-bench errors."""
