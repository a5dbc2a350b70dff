"""Session factory wiring — maps BenchConfig onto a connector and retrying factory."""

import random

from mcp_bench.config.domain.config import BenchConfig
from mcp_bench.core.cancellation import CancellationToken
from mcp_bench.session.domain.factory import SessionFactory
from mcp_bench.session.domain.observer import SessionObserver
from mcp_bench.session.infrastructure.factory import RetryingSessionFactory
from mcp_bench.session.infrastructure.mcp_session import McpSessionConnector


def create_session_factory(
    config: BenchConfig,
    cancellation: CancellationToken,
    observer: SessionObserver,
    rng: random.Random | None = None,
) -> SessionFactory:
    """Return the retrying MCP SessionFactory for the given BenchConfig.

    Raises:
        TransportNotSupportedError: if config.transport is not a known variant.
    """
    connector = McpSessionConnector(
        target=config.target,
        transport=config.transport,
        token=config.token,
        connect_timeout_seconds=config.operation_timeout_seconds,
    )
    return RetryingSessionFactory(
        connector=connector,
        retry=config.retry,
        cancellation=cancellation,
        observer=observer,
        rng=rng,
    )
