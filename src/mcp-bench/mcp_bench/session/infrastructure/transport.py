"""Transport variants — open the MCP wire streams and attach the bearer credential."""

from collections.abc import AsyncGenerator, Generator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from mcp.client.sse import sse_client
from mcp.client.streamable_http import streamablehttp_client

from mcp_bench.session.infrastructure.errors import TransportNotSupportedError

STREAMABLE_HTTP = "streamable-http"
SSE = "sse"
SUPPORTED_TRANSPORTS = (STREAMABLE_HTTP, SSE)

type StreamPair = tuple[Any, Any]


class BearerAuth(httpx.Auth):
    """httpx auth hook that sets ``Authorization: Bearer <token>`` on every request.

    The SSE transport opens a long-lived GET stream and posts messages on a
    separate endpoint announced by the server; the hook covers both.
    """

    def __init__(self, token: str) -> None:
        self._token = token

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


def bearer_headers(token: str) -> dict[str, str] | None:
    """Request-init headers for the streamable HTTP transport."""
    if not token:
        return None
    return {"Authorization": f"Bearer {token}"}


def ensure_supported(transport: str) -> None:
    """Raise TransportNotSupportedError for an unknown transport variant."""
    if transport not in SUPPORTED_TRANSPORTS:
        raise TransportNotSupportedError(transport=transport)


@asynccontextmanager
async def open_transport(
    target: str,
    transport: str,
    token: str,
) -> AsyncGenerator[StreamPair, None]:
    """Open the read/write stream pair for ``transport`` against ``target``.

    Raises:
        TransportNotSupportedError: if ``transport`` is not a known variant.
    """
    ensure_supported(transport=transport)
    if transport == STREAMABLE_HTTP:
        async with streamablehttp_client(target, headers=bearer_headers(token)) as (
            read_stream,
            write_stream,
            _get_session_id,
        ):
            yield read_stream, write_stream
    else:
        auth = BearerAuth(token=token) if token else None
        async with sse_client(target, auth=auth) as (read_stream, write_stream):
            yield read_stream, write_stream
