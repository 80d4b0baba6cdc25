from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

_LOG_LEVELS = {"CRITICAL", "FATAL", "ERROR", "WARNING", "WARN", "INFO", "DEBUG", "NOTSET"}


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


def _getenv_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _getenv_csv(name: str, default: str) -> Tuple[str, ...]:
    raw = _getenv_str(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class TraceConfig:
    TRACE_LOG_LEVEL: str
    TRACE_SIMULATE_NETWORK: bool
    TRACE_SIM_MIN_DELAY_MS: int
    TRACE_SIM_MAX_DELAY_MS: int
    TRACE_SIM_FAILURE_RATE: float
    TRACE_SEED_ON_STARTUP: bool
    TRACE_CORS_ORIGINS: Tuple[str, ...]

    def __post_init__(self) -> None:
        if self.TRACE_LOG_LEVEL not in _LOG_LEVELS:
            raise ValueError(
                f"TRACE_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got {self.TRACE_LOG_LEVEL!r}"
            )
        if self.TRACE_SIM_MIN_DELAY_MS < 0:
            raise ValueError("TRACE_SIM_MIN_DELAY_MS must be >= 0")
        if self.TRACE_SIM_MIN_DELAY_MS > self.TRACE_SIM_MAX_DELAY_MS:
            raise ValueError(
                "TRACE_SIM_MIN_DELAY_MS must not exceed TRACE_SIM_MAX_DELAY_MS "
                f"({self.TRACE_SIM_MIN_DELAY_MS} > {self.TRACE_SIM_MAX_DELAY_MS})"
            )
        if not 0.0 <= self.TRACE_SIM_FAILURE_RATE <= 1.0:
            raise ValueError(
                f"TRACE_SIM_FAILURE_RATE must be within [0, 1], got {self.TRACE_SIM_FAILURE_RATE}"
            )


def load_config() -> TraceConfig:
    return TraceConfig(
        TRACE_LOG_LEVEL=_getenv_str("TRACE_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        TRACE_SIMULATE_NETWORK=_getenv_bool("TRACE_SIMULATE_NETWORK", False),
        TRACE_SIM_MIN_DELAY_MS=_getenv_int("TRACE_SIM_MIN_DELAY_MS", 200),
        TRACE_SIM_MAX_DELAY_MS=_getenv_int("TRACE_SIM_MAX_DELAY_MS", 900),
        TRACE_SIM_FAILURE_RATE=_getenv_float("TRACE_SIM_FAILURE_RATE", 0.02),
        TRACE_SEED_ON_STARTUP=_getenv_bool("TRACE_SEED_ON_STARTUP", False),
        TRACE_CORS_ORIGINS=_getenv_csv("TRACE_CORS_ORIGINS", "*"),
    )
