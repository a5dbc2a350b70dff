"""Tests verifying the McpBenchError type hierarchy."""

from pathlib import Path

from mcp_bench.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)
from mcp_bench.core.errors import McpBenchError
from mcp_bench.load.infrastructure.errors import UnknownModeError
from mcp_bench.session.infrastructure.errors import (
    OperationFailedError,
    SessionCreationCancelledError,
    SessionCreationError,
    TransportNotSupportedError,
)


class TestMcpBenchErrorHierarchy:
    """All mcp-bench-specific exceptions inherit from McpBenchError."""

    def test_missing_env_vars_error_is_mcp_bench_error(self) -> None:
        assert isinstance(MissingEnvVarsError(missing_vars=["X"]), McpBenchError)

    def test_config_validation_error_is_mcp_bench_error(self) -> None:
        assert isinstance(ConfigValidationError(reason="bad"), McpBenchError)

    def test_config_load_error_is_mcp_bench_error(self) -> None:
        assert isinstance(ConfigLoadError(path=Path("/x.yaml")), McpBenchError)

    def test_session_creation_error_is_mcp_bench_error(self) -> None:
        error = SessionCreationError(label="client-0", attempts=4, reason="refused")
        assert isinstance(error, McpBenchError)

    def test_unknown_mode_error_is_mcp_bench_error(self) -> None:
        assert isinstance(UnknownModeError(mode="stampede"), McpBenchError)

    def test_mcp_bench_error_is_exception(self) -> None:
        assert isinstance(McpBenchError("test"), Exception)


class TestErrorMessages:
    """Messages start with 'Failed to' and carry the identifying detail."""

    def test_session_creation_error_message(self) -> None:
        error = SessionCreationError(label="client-7", attempts=4, reason="refused")
        assert str(error).startswith("Failed to ")
        assert "client-7" in str(error)
        assert "4 attempts" in str(error)
        assert error.attempts == 4

    def test_session_creation_cancelled_error_message(self) -> None:
        error = SessionCreationCancelledError(label="client-1", attempts=2)
        assert str(error).startswith("Failed to ")
        assert "cancelled" in str(error)

    def test_operation_failed_error_message(self) -> None:
        error = OperationFailedError(label="client-3", reason="timed out after 60s")
        assert str(error).startswith("Failed to ")
        assert "timed out" in str(error)

    def test_transport_not_supported_error_message(self) -> None:
        error = TransportNotSupportedError(transport="websocket")
        assert "websocket" in str(error)

    def test_unknown_mode_error_message(self) -> None:
        error = UnknownModeError(mode="stampede")
        assert str(error).startswith("Failed to ")
        assert "stampede" in str(error)

    def test_missing_env_vars_are_sorted(self) -> None:
        error = MissingEnvVarsError(missing_vars=["B_VAR", "A_VAR"])
        assert "A_VAR, B_VAR" in str(error)
