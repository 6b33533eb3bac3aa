"""Fixed-interval polling for backend state that settles asynchronously."""

import time
from collections.abc import Callable
from typing import TypeVar

from app.logging.logger import Log
from app.processor.exceptions import ClassificationError, PollTimeoutError

T = TypeVar("T")


def poll_until(
    fetch: Callable[[], T],
    *,
    is_pending: Callable[[T], bool],
    interval_seconds: float,
    is_failure: Callable[[T], bool] | None = None,
    on_failure: Callable[[T], ClassificationError] | None = None,
    max_attempts: int | None = None,
    timeout_seconds: float | None = None,
    delay_first: bool = False,
    description: str = "backend state",
) -> T:
    """Call ``fetch`` until its value is no longer pending.

    The interval is fixed; there is no backoff.

    Args:
        fetch: Returns the current state. Errors it raises propagate unchanged.
        is_pending: True while the state should be fetched again.
        interval_seconds: Sleep between two fetches.
        is_failure: True for states that must abort the poll. Checked before
            ``is_pending`` on every fetched value.
        on_failure: Builds the exception raised for a failure state.
        max_attempts: Upper bound on the number of ``fetch`` calls.
        timeout_seconds: Upper bound on elapsed wall-clock time.
        delay_first: Sleep once before the first fetch.
        description: Used in log and error messages.

    Returns:
        The first state that is neither failed nor pending.

    Raises:
        ClassificationError: from ``on_failure`` for a failure state.
        PollTimeoutError: when ``max_attempts`` or ``timeout_seconds`` is exceeded.
    """
    if max_attempts is not None and max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    started = time.monotonic()
    attempts = 0
    if delay_first:
        time.sleep(interval_seconds)

    while True:
        value = fetch()
        attempts += 1

        if is_failure is not None and is_failure(value):
            if on_failure is None:
                raise ClassificationError(f"Polling {description} failed: {value}")
            raise on_failure(value)
        if not is_pending(value):
            Log.debug(f"Polling {description} settled after {attempts} attempt(s)")
            return value

        if max_attempts is not None and attempts >= max_attempts:
            raise PollTimeoutError(
                f"Polling {description} gave up after {attempts} attempts"
            )
        elapsed = time.monotonic() - started
        if timeout_seconds is not None and elapsed + interval_seconds > timeout_seconds:
            raise PollTimeoutError(
                f"Polling {description} timed out after {elapsed:.1f}s"
            )
        time.sleep(interval_seconds)
