"""Observer port for the config domain — defines events in domain language."""

from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(self, source: str, mode: str, target: str) -> None: ...

    def config_token_missing(self, target: str) -> None: ...
