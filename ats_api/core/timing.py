"""Timing helper for repository calls."""

import time
from collections.abc import Generator
from contextlib import contextmanager

from ats_api.core.logging import get_logger

logger = get_logger(__name__)

SLOW_QUERY_MS = 200


@contextmanager
def timed(operation: str) -> Generator[None, None, None]:
    """Log how long ``operation`` took; warn past ``SLOW_QUERY_MS``.

    Usage:
        with timed("count offers"):
            total = query.count()
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        if duration_ms < SLOW_QUERY_MS:
            logger.debug(f"[{duration_ms:.2f}ms] {operation}")
        else:
            logger.warning(f"[{duration_ms:.2f}ms] {operation} (slow)")
