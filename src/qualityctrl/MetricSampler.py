"""
Turns per-tick frame timings into windowed throughput readings.

Every call to record_frame() counts one completed frame. Once the
accumulated time reaches the window length a reading (frames per second,
rounded to the nearest integer) is appended to a bounded history.
"""
from collections import deque
import logging
import math
from typing import Optional


class MetricSampler:
    def __init__(
        self,
        window_ms: float = 1000,
        capacity: int = 10,
        default_rate: int = 60,
        history: Optional[deque[int]] = None
    ) -> None:
        if window_ms <= 0:
            raise ValueError(f"window_ms must be positive, got {window_ms}")

        if history is None:
            if capacity < 1:
                raise ValueError(f"capacity must be at least 1, got {capacity}")
            history = deque(maxlen=capacity)

        elif history.maxlen is None:
            raise ValueError("history must be a bounded deque")

        self.window_ms = window_ms
        self.default_rate = default_rate
        self.history = history

        self._frames = 0
        self._elapsed_ms = 0.0
        self._last_rate: Optional[int] = None
        self._readings_total = 0

    @property
    def readings_total(self) -> int:
        """Readings appended since construction. Not cleared by reset()."""
        return self._readings_total

    @property
    def capacity(self) -> int:
        return self.history.maxlen

    def record_frame(self, delta_ms: float) -> Optional[int]:
        """
        Count one frame that took ``delta_ms`` milliseconds.

        Args:
            delta_ms: Time since the previous frame in milliseconds

        Returns:
            The new reading if this frame closed a window, otherwise None
        """
        if not math.isfinite(delta_ms) or delta_ms <= 0:
            logging.debug("Ignoring frame sample with delta %r", delta_ms)
            return None

        self._frames += 1
        self._elapsed_ms += delta_ms

        if self._elapsed_ms < self.window_ms:
            return None

        return self._close_window()

    def add_reading(self, rate: int) -> None:
        """Append a reading, evicting the oldest one when the history is full."""
        self._last_rate = rate
        self._readings_total += 1
        self.history.append(rate)

    def current_rate(self) -> int:
        if self._last_rate is None:
            return self.default_rate
        return self._last_rate

    def reset(self) -> None:
        self._frames = 0
        self._elapsed_ms = 0.0
        self._last_rate = None
        self.history.clear()

    def _close_window(self) -> Optional[int]:
        if self._elapsed_ms <= 0:
            return None

        # Half rounds up
        rate = math.floor(self._frames * 1000 / self._elapsed_ms + 0.5)

        self._frames = 0
        self._elapsed_ms = 0.0
        self.add_reading(rate)

        return rate
