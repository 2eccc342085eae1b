"""
Login Rate Limiter
==================

Per-address attempt counter for the login endpoint.

    CLEAR         no entry for the address
    ACCUMULATING  1 .. max_attempts-1 attempts inside the window
    LOCKED        max_attempts or more attempts inside the window

The window is fixed from the first attempt (not sliding). An expired entry is
dropped lazily the next time the address is seen, or by sweep(). Attempts made
while locked are rejected before they are counted, so they never extend the
lockout.
"""

import threading
import time
from dataclasses import dataclass

CLEAR = 'clear'
ACCUMULATING = 'accumulating'
LOCKED = 'locked'


@dataclass
class RateLimitEntry:
    count: int
    first_attempt: float


class LoginRateLimiter:

    def __init__(self, max_attempts=5, window_seconds=15 * 60, clock=time.time):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._clock = clock
        self._entries = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def _expired(self, entry, now):
        return now - entry.first_attempt >= self.window_seconds

    def _current(self, address, now):
        """Entry for address, dropping it first if its window has elapsed"""
        entry = self._entries.get(address)
        if entry is not None and self._expired(entry, now):
            del self._entries[address]
            return None
        return entry

    def state(self, address):
        with self._lock:
            entry = self._current(address, self._clock())
            if entry is None:
                return CLEAR
            return LOCKED if entry.count >= self.max_attempts else ACCUMULATING

    def is_locked(self, address):
        return self.state(address) == LOCKED

    def _increment(self, address, now):
        entry = self._current(address, now)
        if entry is None:
            entry = RateLimitEntry(count=0, first_attempt=now)
            self._entries[address] = entry
        entry.count += 1
        return entry.count

    def record_attempt(self, address):
        """Count one login attempt; returns the attempt count in the current window"""
        with self._lock:
            return self._increment(address, self._clock())

    def begin_attempt(self, address):
        """Check the lock and count the attempt in one step.

        Returns LOCKED (nothing counted) when the address is locked out,
        otherwise the attempt count including this one.
        """
        with self._lock:
            now = self._clock()
            entry = self._current(address, now)
            if entry is not None and entry.count >= self.max_attempts:
                return LOCKED
            return self._increment(address, now)

    def reset(self, address):
        with self._lock:
            self._entries.pop(address, None)

    def retry_after(self, address):
        """Seconds until the address' window ends (0 when clear)"""
        with self._lock:
            now = self._clock()
            entry = self._current(address, now)
            if entry is None:
                return 0
            return max(0, int(entry.first_attempt + self.window_seconds - now))

    def sweep(self, force=False):
        """Drop every expired entry; runs at most once per window unless forced.

        Returns the number of entries removed.
        """
        with self._lock:
            now = self._clock()
            if not force and now - self._last_sweep < self.window_seconds:
                return 0
            self._last_sweep = now
            expired = [addr for addr, entry in self._entries.items() if self._expired(entry, now)]
            for addr in expired:
                del self._entries[addr]
            return len(expired)

    def __len__(self):
        return len(self._entries)


def get_rate_limiter():
    """LoginRateLimiter of the running app"""
    from flask import current_app
    return current_app.extensions['linkpage'].rate_limiter
