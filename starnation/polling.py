"""
Bounded fixed-interval polling.

Used for the Veo video operation and for the checkout payment-status check.
Each attempt waits one interval and then fetches, so a job reported `done`
stops the loop within one interval of completing.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .utils import get_logger

logger = get_logger("polling")

POLL_DONE = "done"
POLL_TIMED_OUT = "timed_out"
POLL_CANCELLED = "cancelled"


@dataclass(frozen=True)
class PollResult:
    status: str
    value: Any
    attempts: int

    @property
    def done(self) -> bool:
        return self.status == POLL_DONE


def poll_until(
    refresh: Callable[[Any], Any],
    initial: Any,
    is_done: Callable[[Any], bool],
    interval: float,
    max_attempts: int,
    sleep: Callable[[float], None] = time.sleep,
    should_cancel: Optional[Callable[[], bool]] = None,
    on_attempt: Optional[Callable[[int, Any], None]] = None,
) -> PollResult:
    """
    Re-fetch a value every `interval` seconds until it is done or the cap is hit.

    Args:
        refresh: Called with the latest value, returns the updated value
        initial: Value before the first attempt (e.g. the operation handle)
        is_done: Predicate deciding completion
        interval: Seconds to wait before each attempt
        max_attempts: Hard cap on the number of refresh calls
        sleep: Wait function (injectable for tests)
        should_cancel: Checked before each wait and each fetch
        on_attempt: Called with (attempt_number, value) after every fetch

    Returns:
        PollResult with status "done", "timed_out" or "cancelled"
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    value = initial
    for attempt in range(1, max_attempts + 1):
        if should_cancel and should_cancel():
            logger.info(f"Polling cancelled before attempt {attempt}")
            return PollResult(POLL_CANCELLED, value, attempt - 1)
        sleep(interval)
        if should_cancel and should_cancel():
            logger.info(f"Polling cancelled before attempt {attempt}")
            return PollResult(POLL_CANCELLED, value, attempt - 1)

        value = refresh(value)
        if on_attempt:
            on_attempt(attempt, value)
        if is_done(value):
            logger.info(f"Polling finished after {attempt} attempt(s)")
            return PollResult(POLL_DONE, value, attempt)

    logger.warning(f"Polling gave up after {max_attempts} attempts ({max_attempts * interval:.0f}s)")
    return PollResult(POLL_TIMED_OUT, value, max_attempts)
