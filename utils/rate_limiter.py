"""Rate limiter for proxy requests."""

import time
from utils.logger import get_logger

logger = get_logger('fetch')

MIN_DELAY = 0.5


class RateLimiter:
    """Keeps a minimum spacing between requests sent through the content proxy."""

    def __init__(self, delay=MIN_DELAY):
        """
        Initialize rate limiter.

        Args:
            delay: Minimum delay between requests in seconds
        """
        self.delay = delay
        self.base_delay = delay
        self.last_request_time = None

    def wait_if_needed(self):
        """Sleep until at least `delay` seconds have passed since the previous request."""
        now = time.monotonic()

        if self.last_request_time is not None:
            elapsed = now - self.last_request_time
            if elapsed < self.delay:
                time.sleep(self.delay - elapsed)
                now = time.monotonic()

        self.last_request_time = now

    def adaptive_delay(self, status_code):
        """Adjust delay based on the proxy's HTTP response status code."""
        if status_code == 429:
            self.delay = min(max(self.delay, MIN_DELAY) * 2, 10.0)
            logger.warning(f"Rate limited (429). Increasing delay to {self.delay}s")
        elif status_code >= 500:
            self.delay = min(max(self.delay, MIN_DELAY) * 1.5, 5.0)
            logger.warning(f"Proxy error ({status_code}). Increasing delay to {self.delay}s")
        elif status_code == 200 and self.delay > self.base_delay:
            # Back off towards the configured delay on success
            self.delay = max(self.delay * 0.9, self.base_delay)
