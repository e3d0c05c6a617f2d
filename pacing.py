"""Fixed politeness delays between Wikipedia lookups."""

from __future__ import annotations

import os
import time
from typing import Callable

_DEFAULT_DELAY_SECONDS = 0.1
_DEFAULT_BATCH_PAUSE_SECONDS = 0.5
_DEFAULT_BATCH_SIZE = 10


class FixedDelayPacer:
    """Sleep a short delay after every record and a longer one every batch_size records.

    The pipeline only calls before_record() and after_record(), so any object
    providing both can stand in for a different rate-limiting strategy.
    """

    def __init__(
        self,
        delay_seconds: float = _DEFAULT_DELAY_SECONDS,
        batch_pause_seconds: float = _DEFAULT_BATCH_PAUSE_SECONDS,
        batch_size: int = _DEFAULT_BATCH_SIZE,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.delay_seconds = delay_seconds
        self.batch_pause_seconds = batch_pause_seconds
        self.batch_size = batch_size
        self._sleep = sleep

    @classmethod
    def from_env(cls) -> FixedDelayPacer:
        """Build a pacer from LOOKUP_DELAY_SECONDS, BATCH_PAUSE_SECONDS and BATCH_SIZE."""
        return cls(
            delay_seconds=float(os.getenv("LOOKUP_DELAY_SECONDS", _DEFAULT_DELAY_SECONDS)),
            batch_pause_seconds=float(os.getenv("BATCH_PAUSE_SECONDS", _DEFAULT_BATCH_PAUSE_SECONDS)),
            batch_size=int(os.getenv("BATCH_SIZE", _DEFAULT_BATCH_SIZE)),
        )

    def before_record(self, index: int) -> None:
        if index > 0 and index % self.batch_size == 0:
            self._sleep(self.batch_pause_seconds)

    def after_record(self, index: int) -> None:
        self._sleep(self.delay_seconds)
