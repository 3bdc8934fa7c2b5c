"""
Upload speed estimation.

Throughput is averaged over a bounded window of samples rather than
computed from the last chunk alone, which damps jitter from bursty
chunk delivery.
"""

from collections import deque

from resilient_fetch.models.progress import SpeedSample

DEFAULT_WINDOW_SIZE = 10


class SpeedEstimator:
    """
    Moving-window bytes/second estimator.

    One instance per upload attempt; it is not shared between attempts or
    between concurrent calls.
    """

    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE):
        if window_size < 2:
            raise ValueError("window_size must be >= 2")
        self._samples: deque[SpeedSample] = deque(maxlen=window_size)

    def record(self, sent_bytes: int, now_ms: int) -> float:
        """
        Append a sample and return the current speed in bytes/second.

        Returns 0.0 until two samples exist or while no time has elapsed
        across the window.
        """
        # deque(maxlen=...) evicts the oldest sample on overflow
        self._samples.append(SpeedSample(timestamp_ms=now_ms, sent_bytes=sent_bytes))
        return self.speed

    @property
    def speed(self) -> float:
        if len(self._samples) < 2:
            return 0.0
        oldest, newest = self._samples[0], self._samples[-1]
        elapsed_ms = newest.timestamp_ms - oldest.timestamp_ms
        if elapsed_ms <= 0:
            return 0.0
        rate = (newest.sent_bytes - oldest.sent_bytes) / (elapsed_ms / 1000)
        return max(rate, 0.0)

    @property
    def samples(self) -> list[SpeedSample]:
        return list(self._samples)
