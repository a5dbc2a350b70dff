"""McpSession — a Session backed by the MCP Python SDK's ClientSession."""

import asyncio
import contextlib

from mcp import ClientSession
from mcp.types import Implementation

from mcp_bench.session.domain.session import Session
from mcp_bench.session.infrastructure.errors import OperationFailedError
from mcp_bench.session.infrastructure.transport import ensure_supported, open_transport

CLIENT_INFO = Implementation(name="benchmark-client", version="1.0.0")


class McpSession:
    """Holds one MCP client session open until ``close()`` is called.

    The transport and ClientSession context managers are entered and exited by
    a dedicated owner task, because the SDK's anyio task groups must be exited
    from the task that entered them. Other tasks only issue requests through
    the established ClientSession.
    """

    def __init__(
        self,
        label: str,
        target: str,
        transport: str,
        token: str,
        connect_timeout_seconds: float,
    ) -> None:
        self._label = label
        self._target = target
        self._transport = transport
        self._token = token
        self._connect_timeout_seconds = connect_timeout_seconds
        self._client: ClientSession | None = None
        self._owner: asyncio.Task[None] | None = None
        self._close_requested = asyncio.Event()
        self._closed = False

    @property
    def label(self) -> str:
        return self._label

    async def open(self) -> None:
        """Connect and perform the MCP initialize handshake.

        On failure or cancellation the owner task is unwound, releasing any
        partially opened transport, before the error propagates.
        """
        ready: asyncio.Future[ClientSession] = (
            asyncio.get_running_loop().create_future()
        )
        self._owner = asyncio.create_task(
            self._hold(ready=ready), name=f"mcp-session:{self._label}"
        )
        try:
            self._client = await ready
        except BaseException:
            self._closed = True
            self._close_requested.set()
            self._owner.cancel()
            with contextlib.suppress(Exception, asyncio.CancelledError):
                await self._owner
            raise

    async def _hold(self, ready: asyncio.Future[ClientSession]) -> None:
        try:
            async with open_transport(
                target=self._target,
                transport=self._transport,
                token=self._token,
            ) as (read_stream, write_stream):
                async with ClientSession(
                    read_stream, write_stream, client_info=CLIENT_INFO
                ) as client:
                    await self._initialize(client=client)
                    ready.set_result(client)
                    await self._close_requested.wait()
        except Exception as exc:
            if not ready.done():
                ready.set_exception(exc)
                return
            raise
        finally:
            if not ready.done():
                ready.cancel()

    async def _initialize(self, client: ClientSession) -> None:
        try:
            await asyncio.wait_for(
                client.initialize(), timeout=self._connect_timeout_seconds
            )
        except TimeoutError as exc:
            raise ConnectionError(
                f"initialize timed out after {self._connect_timeout_seconds}s"
            ) from exc

    async def invoke_operation(self, timeout_seconds: float) -> None:
        """List the target's tools; the payload is not inspected.

        Raises:
            OperationFailedError: on any protocol error, transport error, or timeout.
        """
        if self._client is None or self._closed:
            raise OperationFailedError(label=self._label, reason="session is not open")
        try:
            await asyncio.wait_for(self._client.list_tools(), timeout=timeout_seconds)
        except TimeoutError as exc:
            raise OperationFailedError(
                label=self._label, reason=f"timed out after {timeout_seconds}s"
            ) from exc
        except Exception as exc:  # noqa: BLE001
            raise OperationFailedError(label=self._label, reason=repr(exc)) from exc

    async def close(self) -> None:
        """Close the session. Subsequent calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        self._close_requested.set()
        if self._owner is not None:
            await self._owner


class McpSessionConnector:
    """Satisfies the SessionConnector protocol: one connection attempt per call."""

    def __init__(
        self,
        target: str,
        transport: str,
        token: str,
        connect_timeout_seconds: float,
    ) -> None:
        ensure_supported(transport=transport)
        self._target = target
        self._transport = transport
        self._token = token
        self._connect_timeout_seconds = connect_timeout_seconds

    async def connect(self, label: str) -> Session:
        session = McpSession(
            label=label,
            target=self._target,
            transport=self._transport,
            token=self._token,
            connect_timeout_seconds=self._connect_timeout_seconds,
        )
        await session.open()
        return session
