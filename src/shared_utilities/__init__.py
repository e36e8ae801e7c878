"""
Common utilities shared across tools
"""

from .logging_config import configure_logging, get_logger, get_logging_manager
from .rate_limit_manager import (
    RateLimitExhausted,
    RateLimitManager,
    RateLimitStatus,
    global_rate_limit_manager,
)
from .telemetry import get_telemetry_manager, trace_function, trace_operation

__all__ = [
    "configure_logging",
    "get_logger",
    "get_logging_manager",
    "get_telemetry_manager",
    "trace_function",
    "trace_operation",
    "RateLimitExhausted",
    "RateLimitManager",
    "RateLimitStatus",
    "global_rate_limit_manager",
]
