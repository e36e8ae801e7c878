"""
Rate limit aware request helper.

Reads the conventional X-RateLimit-* headers when a service sends them and
throttles the next request accordingly. Services that send no such headers
are only spaced out by ``min_interval``.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

import requests
from loguru import logger


class RateLimitExhausted(requests.exceptions.HTTPError):
    """Raised instead of sending a request the server would refuse."""


@dataclass
class RateLimitStatus:
    """Rate limit window as reported by the last response."""

    limit: int
    remaining: int
    reset_time: int  # Unix timestamp
    used: int

    @property
    def usage_percentage(self) -> float:
        """Fraction of the window already used (0.0 to 1.0)."""
        if self.limit == 0:
            return 0.0
        return (self.limit - self.remaining) / self.limit

    @property
    def seconds_until_reset(self) -> float:
        return max(0.0, self.reset_time - time.time())


class RateLimitManager:
    """
    Spaces out HTTP requests according to the server's rate limit headers.

    One instance should be shared by every caller of the same service so that
    the last known window is respected across components.
    """

    def __init__(
        self,
        min_interval: float = 0.0,
        safety_buffer: int = 10,
        max_wait: float = 300.0,
    ):
        """
        Initialize rate limit manager.

        Args:
            min_interval: Minimum seconds between two requests
            safety_buffer: Requests kept in reserve before throttling hard
            max_wait: Upper bound for a single throttling pause
        """
        self.min_interval = min_interval
        self.safety_buffer = safety_buffer
        self.max_wait = max_wait
        self.last_status: RateLimitStatus | None = None
        self.last_request_time = 0.0

    def extract_rate_limit_status(
        self, response: requests.Response
    ) -> RateLimitStatus | None:
        """
        Extract rate limit information from response headers.

        Returns:
            RateLimitStatus, or None if the server sent no rate limit headers
        """
        headers = response.headers
        if "X-RateLimit-Remaining" not in headers:
            return None

        try:
            limit = int(headers.get("X-RateLimit-Limit", 0))
            remaining = int(headers["X-RateLimit-Remaining"])
            reset_time = int(headers.get("X-RateLimit-Reset", 0))
            used = int(headers.get("X-RateLimit-Used", limit - remaining))
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to parse rate limit headers: {e}")
            return None

        status = RateLimitStatus(
            limit=limit, remaining=remaining, reset_time=reset_time, used=used
        )
        self.last_status = status
        return status

    def calculate_delay(self) -> float:
        """Seconds to wait before the next request."""
        status = self.last_status
        if status is None or status.remaining > self.safety_buffer:
            return self.min_interval

        # Near exhaustion: spread what is left over the rest of the window
        delay = status.seconds_until_reset / max(1, status.remaining)
        return min(max(delay, self.min_interval), self.max_wait)

    def wait_if_needed(self, tool_name: str = "unknown") -> None:
        """Sleep until the next request is allowed."""
        elapsed = time.time() - self.last_request_time
        delay = max(0.0, self.calculate_delay() - elapsed)

        if delay > 0:
            logger.debug(f"[{tool_name}] Rate limiting: waiting {delay:.1f}s")
            time.sleep(delay)

        self.last_request_time = time.time()

    def should_pause_operations(self) -> tuple[bool, float]:
        """
        Check whether the window is exhausted.

        Returns:
            Tuple of (should_pause, seconds_until_reset)
        """
        status = self.last_status
        if status is None or status.remaining > 0:
            return False, 0.0
        return True, status.seconds_until_reset

    def make_rate_limited_request(
        self, request_func: Callable, tool_name: str = "unknown", *args, **kwargs
    ) -> requests.Response:
        """
        Make a throttled HTTP request.

        Args:
            request_func: Function that performs the request (e.g. requests.get)
            tool_name: Caller name used in log messages
            *args, **kwargs: Passed through to request_func

        Returns:
            The response object

        Raises:
            RateLimitExhausted: If the last response left no requests in the window
        """
        should_pause, wait_time = self.should_pause_operations()
        if should_pause and wait_time > 0:
            raise RateLimitExhausted(
                f"Rate limit exhausted, resets in {wait_time / 60:.1f} minutes"
            )

        self.wait_if_needed(tool_name=tool_name)
        response = request_func(*args, **kwargs)

        status = self.extract_rate_limit_status(response)
        if status:
            logger.debug(
                f"[{tool_name}] Rate limit: {status.remaining}/{status.limit} remaining "
                f"({status.usage_percentage:.1%} used)"
            )

        return response


# Shared instance for all calls to the discovery service
global_rate_limit_manager = RateLimitManager()
