"""BenchConfig aggregate — the root configuration object for a benchmark run."""

from typing import Literal

from pydantic import BaseModel, Field

type Mode = Literal["normal", "swarm"]
type TransportVariant = Literal["streamable-http", "sse"]
type TickOverlap = Literal["allow", "skip"]


class RetryConfig(BaseModel, frozen=True, extra="forbid"):
    """Session-creation retry parameters consumed by the backoff policy."""

    max_retries: int = Field(default=3, ge=0)
    initial_backoff_ms: float = Field(default=100, ge=0)
    max_backoff_ms: float = Field(default=10000, ge=0)
    backoff_factor: float = Field(default=2, ge=1)


class BenchConfig(BaseModel, frozen=True, extra="forbid"):
    """Root configuration aggregate for an mcp-bench run.

    ``clients`` is the pool size in normal mode and the batch size in swarm
    mode. ``clients_creation_batch_size`` and ``ops_rate`` only apply to normal
    mode; ``swarm_interval_ms`` and ``max_batches`` only apply to swarm mode.
    ``duration_seconds`` stops the run as if it had been interrupted.
    """

    target: str = Field(min_length=1)
    transport: TransportVariant = "streamable-http"
    token: str = Field(default="", repr=False)
    mode: Mode = "normal"
    clients: int = Field(default=10, ge=1)
    clients_creation_batch_size: int = Field(default=5, ge=1)
    ops_rate: float = Field(default=60, gt=0)
    swarm_interval_ms: int = Field(default=5000, ge=0)
    operation_timeout_seconds: float = Field(default=60, gt=0)
    tick_overlap: TickOverlap = "allow"
    duration_seconds: float | None = Field(default=None, gt=0)
    max_batches: int | None = Field(default=None, ge=1)
    retry: RetryConfig = Field(default_factory=RetryConfig)

    @property
    def tick_interval_seconds(self) -> float:
        """Per-session tick period in normal mode."""
        return 60.0 / self.ops_rate
