"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, source: str, mode: str, target: str) -> None:
        self._log.info("config.loaded", source=source, mode=mode, target=target)

    def config_token_missing(self, target: str) -> None:
        self._log.warning(
            "config.token_missing",
            target=target,
            message="No bearer token configured; requests are sent unauthenticated",
        )
