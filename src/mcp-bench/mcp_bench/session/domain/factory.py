"""SessionConnector and SessionFactory Protocols — how sessions come into existence."""

from typing import Protocol

from mcp_bench.session.domain.session import Session


class SessionConnector(Protocol):
    """Performs one raw connection attempt: transport construction plus handshake.

    A failed attempt must release anything it partially opened before raising.
    """

    async def connect(self, label: str) -> Session: ...


class SessionFactory(Protocol):
    """Produces an established Session, hiding retries from the caller."""

    async def create(self, label: str) -> Session: ...
