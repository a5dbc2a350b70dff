"""YAML input loader — parses, interpolates env vars, normalizes, validates, and emits observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mcp_bench.config.domain.config import BenchConfig
from mcp_bench.config.domain.observer import ConfigObserver
from mcp_bench.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from mcp_bench.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)

# Actor-style camelCase input keys accepted alongside the snake_case field names.
_TOP_LEVEL_ALIASES: dict[str, str] = {
    "clientsCreationBatchSize": "clients_creation_batch_size",
    "opsRate": "ops_rate",
    "swarmInterval": "swarm_interval_ms",
    "swarm_interval": "swarm_interval_ms",
    "operationTimeoutSeconds": "operation_timeout_seconds",
    "tickOverlap": "tick_overlap",
}

_RETRY_ALIASES: dict[str, str] = {
    "maxRetries": "max_retries",
    "initialBackoffMs": "initial_backoff_ms",
    "maxBackoffMs": "max_backoff_ms",
    "backoffFactor": "backoff_factor",
    "max_retries": "max_retries",
    "initial_backoff_ms": "initial_backoff_ms",
    "max_backoff_ms": "max_backoff_ms",
    "backoff_factor": "backoff_factor",
}


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns a BenchConfig from a YAML or JSON file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path, overrides: dict[str, Any] | None = None) -> BenchConfig:
        """
        Load a BenchConfig from ``path``; ``overrides`` win over file values.

        Raises:
            ConfigLoadError: if the file cannot be read or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if the merged values violate the schema.
        """
        raw = _parse_yaml(path=path)
        _check_missing_env_vars(raw=raw)
        interpolated = interpolate(raw)
        return build_config(
            raw=interpolated,
            overrides=overrides,
            observer=self._observer,
            source=str(path),
        )


def build_config(
    raw: dict[str, Any],
    overrides: dict[str, Any] | None,
    observer: ConfigObserver,
    source: str,
) -> BenchConfig:
    """Normalize raw input keys, apply overrides, and validate into a BenchConfig.

    Raises:
        ConfigValidationError: if the merged values violate the schema.
    """
    merged = _normalize(raw=raw)
    for key, value in _normalize(raw=overrides or {}).items():
        if key == "retry":
            merged["retry"] = {**merged.get("retry", {}), **value}
        else:
            merged[key] = value

    try:
        cfg = BenchConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigValidationError(reason=_format_validation_error(exc)) from exc

    if not cfg.token:
        observer.config_token_missing(target=cfg.target)
    observer.config_loaded(source=source, mode=cfg.mode, target=cfg.target)
    return cfg


def _parse_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason="invalid YAML") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigLoadError(path=path, reason="top level must be a mapping")
    return data


def _check_missing_env_vars(raw: Any) -> None:
    """Raise MissingEnvVarsError if any ${ENV_VAR} references in raw are unset."""
    missing = collect_missing_vars(raw)
    if missing:
        raise MissingEnvVarsError(missing)


def _normalize(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Map Actor-style keys onto BenchConfig field names.

    ``sse: true`` selects the SSE transport, flat retry keys are folded into the
    nested ``retry`` mapping, and ``None`` values are dropped so that defaults
    apply.
    """
    normalized: dict[str, Any] = {}
    retry: dict[str, Any] = dict(raw.get("retry") or {})

    for key, value in raw.items():
        if value is None or key == "retry":
            continue
        if key == "sse":
            normalized["transport"] = "sse" if value else "streamable-http"
        elif key in _RETRY_ALIASES:
            retry[_RETRY_ALIASES[key]] = value
        else:
            normalized[_TOP_LEVEL_ALIASES.get(key, key)] = value

    if retry:
        normalized["retry"] = retry
    return normalized


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(loc) for loc in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)
