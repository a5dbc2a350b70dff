"""RunSummary — the frozen statistics of a finished (or stopping) benchmark run."""

from pydantic import BaseModel, Field


class RunSummary(BaseModel, frozen=True):
    """Immutable counters plus wall time; one shared shape for both modes.

    Swarm-only counters stay at zero in normal mode, and ``operations_skipped``
    is only non-zero under the skip-if-busy tick policy.
    """

    mode: str = Field(min_length=1)
    operations_completed: int = Field(ge=0)
    operations_failed: int = Field(ge=0)
    operations_skipped: int = Field(default=0, ge=0)
    batches_completed: int = Field(default=0, ge=0)
    clients_created: int = Field(default=0, ge=0)
    elapsed_seconds: float = Field(ge=0)

    @property
    def operations_total(self) -> int:
        return self.operations_completed + self.operations_failed

    @property
    def operations_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.operations_completed / self.elapsed_seconds

    @property
    def clients_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.clients_created / self.elapsed_seconds
