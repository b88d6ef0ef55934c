"""Utility functions and helpers.

Logging and worker pools.
"""

from .logging import setup_logger, get_logger, session_log
from .parallel import get_optimal_workers, create_worker_pool

__all__ = ["setup_logger", "get_logger", "session_log", "get_optimal_workers", "create_worker_pool"]
