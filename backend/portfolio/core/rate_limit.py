import logging
import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from portfolio.core.settings import Settings

log = logging.getLogger("uvicorn.error")

RATE_LIMIT_MESSAGE = "Too many contact form submissions, please try again later."


@dataclass
class RateWindow:
    started_at: float
    count: int = 0


@dataclass(frozen=True)
class RateDecision:
    allowed: bool
    retry_after: int = 0


class RateLimiter:
    """
    Fixed-window attempt counter keyed by client address.

    - a missing or elapsed window restarts at count 1 and allows
    - otherwise the count is incremented and the attempt is allowed
      while count <= max_attempts
    - at most max_clients addresses are tracked; elapsed windows are
      swept first, then the least recently seen addresses are evicted
    """

    def __init__(self,
                 window_seconds: float = 15 * 60,
                 max_attempts: int = 5,
                 max_clients: int = 10_000,
                 clock: Callable[[], float] = time.monotonic):
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.window_seconds = window_seconds
        self.max_attempts = max_attempts
        self.max_clients = max(1, max_clients)
        self.clock = clock
        self._windows: "OrderedDict[str, RateWindow]" = OrderedDict()
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings, clock: Optional[Callable[[], float]] = None) -> "RateLimiter":
        return cls(
            window_seconds=settings.contact_rate_window_seconds,
            max_attempts=settings.contact_rate_max,
            max_clients=settings.contact_rate_max_clients,
            clock=clock or time.monotonic,
        )

    def __len__(self) -> int:
        return len(self._windows)

    def _elapsed(self, window: RateWindow, now: float) -> bool:
        return now - window.started_at >= self.window_seconds

    def _evict(self, now: float) -> None:
        stale = [addr for addr, w in self._windows.items() if self._elapsed(w, now)]
        for addr in stale:
            del self._windows[addr]
        evicted = 0
        while len(self._windows) > self.max_clients:
            self._windows.popitem(last=False)
            evicted += 1
        if evicted:
            log.warning(f"[rate_limit] table full, evicted {evicted} least recently seen addresses")

    def hit(self, address: str) -> RateDecision:
        with self._lock:
            now = self.clock()
            window = self._windows.get(address)
            if window is None or self._elapsed(window, now):
                window = RateWindow(started_at=now, count=1)
                self._windows[address] = window
                self._windows.move_to_end(address)
                if len(self._windows) > self.max_clients:
                    self._evict(now)
                return RateDecision(allowed=True)

            window.count += 1
            self._windows.move_to_end(address)
            if window.count <= self.max_attempts:
                return RateDecision(allowed=True)

            remaining = window.started_at + self.window_seconds - now
            return RateDecision(allowed=False, retry_after=max(1, math.ceil(remaining)))

    def reset(self, address: Optional[str] = None) -> None:
        with self._lock:
            if address is None:
                self._windows.clear()
            else:
                self._windows.pop(address, None)
