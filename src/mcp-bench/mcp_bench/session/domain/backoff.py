"""Backoff policy — computes the delay before the next session-creation retry."""

import random

from mcp_bench.config.domain.config import RetryConfig

JITTER_LOW = 0.85
JITTER_HIGH = 1.15


def next_delay_ms(
    attempt: int,
    retry: RetryConfig,
    rng: random.Random | None = None,
) -> float:
    """Return the delay in milliseconds before retry number ``attempt``.

    ``attempt`` is 1 for the first retry. The exponential base is capped at
    ``max_backoff_ms`` and multiplied by a uniform jitter in [0.85, 1.15] so
    that sessions failing together do not retry in lockstep; the jittered value
    is capped again. Deterministic for a seeded ``rng``.
    """
    if attempt < 1:
        raise ValueError(f"attempt must be >= 1, got {attempt}")
    source = rng if rng is not None else random
    base = min(retry.initial_backoff_ms, retry.max_backoff_ms)
    # Grow stepwise so that large attempt numbers saturate instead of overflowing.
    for _ in range(attempt - 1):
        if base >= retry.max_backoff_ms or base == 0:
            break
        base = min(base * retry.backoff_factor, retry.max_backoff_ms)
    jitter = source.uniform(JITTER_LOW, JITTER_HIGH)
    return min(base * jitter, retry.max_backoff_ms)
