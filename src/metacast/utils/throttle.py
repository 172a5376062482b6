"""Fixed-interval request throttling."""

import threading
import time
from collections.abc import Callable


class Throttle:
    """Enforce a minimum interval between consecutive operations.

    Unlike a token bucket there is no burst allowance: every call to
    :meth:`wait` after the first blocks until ``interval_seconds`` have
    passed since the previous call returned.

    Example:
        >>> throttle = Throttle(interval_seconds=1.0)
        >>> throttle.wait()  # returns immediately
        >>> throttle.wait()  # sleeps ~1s
    """

    def __init__(
        self,
        interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize throttle.

        Args:
            interval_seconds: Minimum spacing between operations
            clock: Monotonic clock (injectable for tests)
            sleep: Sleep function (injectable for tests)
        """
        if interval_seconds < 0:
            raise ValueError("interval_seconds must be >= 0")

        self.interval = interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None
        self.lock = threading.Lock()

    def wait(self) -> float:
        """Block until the next operation may start.

        Returns:
            Seconds actually slept
        """
        with self.lock:
            slept = 0.0
            if self._last is not None:
                remaining = self.interval - (self._clock() - self._last)
                if remaining > 0:
                    self._sleep(remaining)
                    slept = remaining
            self._last = self._clock()
            return slept

    def reset(self) -> None:
        """Forget the previous operation so the next wait returns at once."""
        with self.lock:
            self._last = None
