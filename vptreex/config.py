from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict

_LOGGER = logging.getLogger("vptreex")

_SUPPORTED_SELECTIONS = {"exhaustive", "sampled", "random"}
_SUPPORTED_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}
_DEFAULT_METRIC = "euclidean"
_DEFAULT_SELECTION = "exhaustive"
_DEFAULT_SAMPLE_SIZE = 64


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_optional_int(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid integer value '{raw}'") from exc


def _parse_log_level(raw: str | None) -> str:
    if raw is None or raw.strip() == "":
        return "INFO"
    level = raw.strip().upper()
    if level not in _SUPPORTED_LOG_LEVELS:
        raise ValueError(f"Unsupported log level '{raw}'. Expected one of {_SUPPORTED_LOG_LEVELS}.")
    return level


def _parse_selection(raw: str | None) -> tuple[str, int | None]:
    """Split ``"sampled:32"`` style values into a strategy name and sample size."""

    if raw is None or raw.strip() == "":
        return _DEFAULT_SELECTION, None
    name, _, size = raw.strip().lower().partition(":")
    if name not in _SUPPORTED_SELECTIONS:
        raise ValueError(
            f"Unsupported selection strategy '{name}'. Expected one of {_SUPPORTED_SELECTIONS}."
        )
    if size and name != "sampled":
        raise ValueError(f"Selection strategy '{name}' does not take a sample size.")
    return name, _parse_optional_int(size) if size else None


def _parse_sample_size(raw: int | None) -> int:
    if raw is None:
        return _DEFAULT_SAMPLE_SIZE
    if raw <= 0:
        raise ValueError(f"Sample size must be positive, got {raw}.")
    return raw


@dataclass(frozen=True)
class RuntimeConfig:
    metric: str
    selection: str
    sample_size: int
    seed: int | None
    enable_diagnostics: bool
    log_level: str

    @property
    def selection_spec(self) -> str:
        if self.selection == "sampled":
            return f"sampled:{self.sample_size}"
        return self.selection

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        metric = os.getenv("VPTREEX_METRIC", _DEFAULT_METRIC).strip().lower() or _DEFAULT_METRIC
        selection, inline_size = _parse_selection(os.getenv("VPTREEX_SELECTION"))
        if inline_size is None:
            inline_size = _parse_optional_int(os.getenv("VPTREEX_SAMPLE_SIZE"))
        sample_size = _parse_sample_size(inline_size)
        seed = _parse_optional_int(os.getenv("VPTREEX_SEED"))
        enable_diagnostics = _bool_from_env(
            os.getenv("VPTREEX_ENABLE_DIAGNOSTICS"), default=True
        )
        log_level = _parse_log_level(os.getenv("VPTREEX_LOG_LEVEL"))
        return cls(
            metric=metric,
            selection=selection,
            sample_size=sample_size,
            seed=seed,
            enable_diagnostics=enable_diagnostics,
            log_level=log_level,
        )


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("vptreex")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    config = RuntimeConfig.from_env()
    _configure_logging(config.log_level)
    _LOGGER.debug("Runtime configuration resolved: %s", config)
    return config


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()


def describe_runtime() -> Dict[str, Any]:
    """Return a serialisable view of the active runtime configuration."""

    config = runtime_config()
    return {
        "metric": config.metric,
        "selection": config.selection,
        "sample_size": config.sample_size,
        "seed": config.seed,
        "enable_diagnostics": config.enable_diagnostics,
        "log_level": config.log_level,
    }


__all__ = [
    "RuntimeConfig",
    "describe_runtime",
    "reset_runtime_config_cache",
    "runtime_config",
]
