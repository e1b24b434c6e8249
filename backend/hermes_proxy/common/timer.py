"""
Latency Measurement

Stopwatch used to time upstream calls for the prompt log.
"""

import time
from typing import Optional


class Timer:
    """
    Millisecond stopwatch on time.perf_counter()

    Starts when created. Usable as a context manager, which stops it on exit:

        with Timer() as timer:
            response = await client.post(...)
        log(timer.elapsed_ms)
    """

    def __init__(self):
        self._started = time.perf_counter()
        self._stopped: Optional[float] = None

    def __enter__(self) -> "Timer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def stop(self) -> int:
        """Freeze the reading (first call wins) and return it"""
        if self._stopped is None:
            self._stopped = time.perf_counter()
        return self.elapsed_ms

    @property
    def elapsed_ms(self) -> int:
        # Running timers read the current time
        end = self._stopped if self._stopped is not None else time.perf_counter()
        return int((end - self._started) * 1000)
