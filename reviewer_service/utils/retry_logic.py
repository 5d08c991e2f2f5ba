"""Retry helpers for reaching the database at startup.

The database container usually comes up after the service at deploy time, so
startup waits for it with exponential backoff and jitter instead of failing on
the first refused connection. Request handling never retries: a failed
operation is reported to the caller.
"""

import functools
import logging
import random
import time
from typing import Callable, Optional, Tuple, Type

from sqlalchemy.exc import InterfaceError, OperationalError

logger = logging.getLogger(__name__)

MAX_RETRIES = 10
BASE_DELAY = 1.0  # seconds
MAX_DELAY = 30.0  # seconds
BACKOFF_FACTOR = 2.0

# Failures that mean "not reachable yet" rather than "broken"
CONNECTION_ERRORS: Tuple[Type[Exception], ...] = (
    OperationalError,
    InterfaceError,
    ConnectionError,
)


def exponential_backoff(attempt: int, base_delay: float, max_delay: float,
                        backoff_factor: float) -> float:
    """Seconds to wait before retry number attempt (0-based), +/-25% jitter."""
    delay = min(base_delay * backoff_factor ** attempt, max_delay)
    spread = delay * 0.25
    return max(0, delay + random.uniform(-spread, spread))


def retry_with_backoff(
    max_retries: int = MAX_RETRIES,
    base_delay: float = BASE_DELAY,
    max_delay: float = MAX_DELAY,
    backoff_factor: float = BACKOFF_FACTOR,
    retry_on: Optional[Tuple[Type[Exception], ...]] = None,
    sleep: Callable[[float], None] = time.sleep,
):
    """Retry the decorated call on connection errors.

    The call runs at most max_retries + 1 times; the last error is re-raised.
    Exceptions outside retry_on propagate immediately.

    Example:
        @retry_with_backoff(max_retries=5, base_delay=0.5)
        def connect():
            database.ping()
    """
    retry_on = retry_on or CONNECTION_ERRORS
    attempts = max_retries + 1

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except retry_on as e:
                    attempt += 1
                    if attempt >= attempts:
                        logger.error(f"{func.__name__} gave up after {attempt} attempts: {e}")
                        raise

                    delay = exponential_backoff(attempt - 1, base_delay, max_delay, backoff_factor)
                    logger.warning(
                        f"{func.__name__} attempt {attempt}/{attempts} failed: {e}; "
                        f"next try in {delay:.2f}s"
                    )
                    sleep(delay)

        return wrapper

    return decorator


def wait_for_database(database, max_retries: int = MAX_RETRIES,
                      base_delay: float = BASE_DELAY,
                      sleep: Callable[[float], None] = time.sleep) -> None:
    """Block until the database answers SELECT 1.

    Raises the last connection error once retries are exhausted.
    """

    @retry_with_backoff(max_retries=max_retries, base_delay=base_delay, sleep=sleep)
    def ping_database():
        database.ping()

    ping_database()
    logger.info("Database is reachable")
