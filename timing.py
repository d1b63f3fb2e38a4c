# timing.py
import time

DEFAULT_WAIT_MS = 500


def _now_ms():
    return time.monotonic() * 1000


class Throttler:
    """Drops repeats of the same key that arrive within `wait_ms` of each other."""

    def __init__(self, wait_ms=DEFAULT_WAIT_MS):
        # wait_ms can also be a function of the key
        self.wait_ms = wait_ms
        self.last_call_time = 0
        self.last_key = None

    def should_proceed(self, key, now_ms=None):
        now = _now_ms() if now_ms is None else now_ms
        if key == self.last_key:
            wait = self.wait_ms(key) if callable(self.wait_ms) else self.wait_ms
            proceed = now - self.last_call_time >= wait
        else:
            proceed = True
        if proceed:
            self.last_call_time = now
            self.last_key = key
        return proceed


class TickTimer:
    """Fixed-period clock for monster moves. A stopped timer never fires."""

    def __init__(self, interval_ms):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.interval_ms = interval_ms
        self.next_tick = None

    @property
    def running(self):
        return self.next_tick is not None

    def start(self, now_ms):
        self.next_tick = now_ms + self.interval_ms

    def stop(self):
        self.next_tick = None

    def due(self, now_ms):
        """Number of ticks elapsed since the last call; advances the schedule."""
        if self.next_tick is None or now_ms < self.next_tick:
            return 0
        ticks = int((now_ms - self.next_tick) // self.interval_ms) + 1
        self.next_tick += ticks * self.interval_ms
        return ticks
