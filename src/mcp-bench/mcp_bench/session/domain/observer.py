"""Observer port for the session domain — defines events in domain language."""

from typing import Protocol


class SessionObserver(Protocol):
    """Observer port emitting structured events during session establishment."""

    def session_created(self, label: str, attempts: int) -> None: ...

    def session_creation_retry(
        self,
        label: str,
        attempt: int,
        max_retries: int,
        reason: str,
        backoff_ms: float,
    ) -> None: ...

    def session_creation_failed(self, label: str, attempts: int, reason: str) -> None: ...

    def session_creation_cancelled(self, label: str, attempts: int) -> None: ...
