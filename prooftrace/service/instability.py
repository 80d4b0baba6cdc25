from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional

from prooftrace.internal_core.config import TraceConfig
from prooftrace.internal_core.errors import TransportFailureError

logger = logging.getLogger(__name__)

HICCUP_MESSAGE = "Temporary backend hiccup. Please retry."


class NetworkSimulator:
    """Injects random latency and occasional failures ahead of an operation."""

    def __init__(
        self,
        *,
        min_delay_ms: int = 200,
        max_delay_ms: int = 900,
        failure_rate: float = 0.02,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if min_delay_ms < 0 or min_delay_ms > max_delay_ms:
            raise ValueError(f"Invalid delay range: {min_delay_ms}..{max_delay_ms} ms")
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError(f"failure_rate must be within [0, 1], got {failure_rate}")
        self._min_delay_ms = min_delay_ms
        self._max_delay_ms = max_delay_ms
        self._failure_rate = failure_rate
        self._rng = rng or random.Random()
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: TraceConfig) -> "NetworkSimulator":
        return cls(
            min_delay_ms=config.TRACE_SIM_MIN_DELAY_MS,
            max_delay_ms=config.TRACE_SIM_MAX_DELAY_MS,
            failure_rate=config.TRACE_SIM_FAILURE_RATE,
        )

    def __call__(self, operation: str) -> None:
        delay_ms = self._rng.randint(self._min_delay_ms, self._max_delay_ms)
        self._sleep(delay_ms / 1000.0)
        if self._rng.random() < self._failure_rate:
            logger.info("simulated_failure operation=%s delay_ms=%s", operation, delay_ms)
            raise TransportFailureError(HICCUP_MESSAGE)
