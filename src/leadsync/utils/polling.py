"""
Bounded polling helper.
"""
import time
from typing import Callable, Optional, TypeVar

from src.leadsync.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class PollingTimeoutError(TimeoutError):
    """Raised when a polled condition never produced a value."""


def await_condition(
    predicate: Callable[[], Optional[T]],
    interval: float,
    timeout: float,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call ``predicate`` every ``interval`` seconds until it returns a truthy value.

    Args:
        predicate: Zero-argument callable; a truthy return ends the wait
        interval: Seconds between attempts
        timeout: Total seconds before giving up
        clock: Monotonic time source (injectable for tests)
        sleep: Sleep function (injectable for tests)

    Returns:
        The first truthy value returned by ``predicate``

    Raises:
        PollingTimeoutError: If ``timeout`` elapses first
    """
    if interval <= 0 or timeout <= 0:
        raise ValueError("interval and timeout must be positive")

    start = clock()
    attempts = 0
    while clock() - start < timeout:
        attempts += 1
        result = predicate()
        if result:
            return result
        sleep(interval)

    logger.debug("polling_timed_out", attempts=attempts, timeout=timeout)
    raise PollingTimeoutError(f"Condition not met within {timeout}s ({attempts} attempts)")
