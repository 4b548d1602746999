
import time
from typing import Callable, Dict, Tuple


class FixedWindowLimiter:
	"""Allows ``max_requests`` per client per window; counters reset when the window ends."""

	def __init__(self, max_requests: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
		self.max_requests = max_requests
		self.window_seconds = window_seconds
		self._clock = clock
		self._windows: Dict[str, Tuple[float, int]] = {}

	def hit(self, key: str) -> bool:
		now = self._clock()
		start, count = self._windows.get(key, (now, 0))
		if now - start >= self.window_seconds:
			start, count = now, 0
		count += 1
		self._windows[key] = (start, count)
		if len(self._windows) > 10000:
			self._prune(now)
		return count <= self.max_requests

	def remaining(self, key: str) -> int:
		start, count = self._windows.get(key, (self._clock(), 0))
		if self._clock() - start >= self.window_seconds:
			return self.max_requests
		return max(0, self.max_requests - count)

	def _prune(self, now: float):
		expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_seconds]
		for k in expired:
			del self._windows[k]
