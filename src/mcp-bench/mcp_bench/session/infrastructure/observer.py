"""StructlogSessionObserver — production observer that delegates to structlog."""

import structlog


class StructlogSessionObserver:
    """Logs session domain events to structlog.

    Does NOT inherit from SessionObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def session_created(self, label: str, attempts: int) -> None:
        self._log.debug("session.created", label=label, attempts=attempts)

    def session_creation_retry(
        self,
        label: str,
        attempt: int,
        max_retries: int,
        reason: str,
        backoff_ms: float,
    ) -> None:
        self._log.warning(
            "session.creation.retry",
            label=label,
            attempt=f"{attempt}/{max_retries}",
            reason=reason,
            backoff_ms=round(backoff_ms),
        )

    def session_creation_failed(self, label: str, attempts: int, reason: str) -> None:
        self._log.error(
            "session.creation.failed",
            label=label,
            attempts=attempts,
            reason=reason,
        )

    def session_creation_cancelled(self, label: str, attempts: int) -> None:
        self._log.info("session.creation.cancelled", label=label, attempts=attempts)
