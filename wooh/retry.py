"""
Bounded retry helper used for SEO generation and catalog page requests.
"""

import logging
from typing import Callable, Optional, Tuple, Type, TypeVar

from .errors import RetriesExhausted

T = TypeVar("T")


def with_retries(
    operation: Callable[[], T],
    max_attempts: int,
    is_acceptable: Optional[Callable[[T], bool]] = None,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    label: str = "operation",
    on_attempt_failed: Optional[Callable[[int, Optional[BaseException]], None]] = None,
) -> T:
    """
    Call operation until it returns an acceptable result.

    An attempt fails when operation raises one of retry_on, or when its
    result is rejected by is_acceptable. Other exceptions propagate
    immediately.

    Args:
        operation: Zero-argument callable
        max_attempts: Upper bound on calls (at least 1)
        is_acceptable: Optional predicate on the result
        retry_on: Exception types that count as a failed attempt
        label: Name used in log messages
        on_attempt_failed: Called with (attempt, error) after each failed attempt;
            error is None when the result was rejected

    Returns:
        The first acceptable result

    Raises:
        RetriesExhausted: If every attempt failed
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    last_error = None
    for attempt in range(1, max_attempts + 1):
        try:
            result = operation()
        except retry_on as e:
            last_error = e
            logging.warning(f"{label} failed (attempt {attempt}/{max_attempts}): {e}")
            if on_attempt_failed is not None:
                on_attempt_failed(attempt, e)
            continue

        if is_acceptable is None or is_acceptable(result):
            return result

        last_error = None
        logging.warning(f"{label} returned an unacceptable result (attempt {attempt}/{max_attempts})")
        if on_attempt_failed is not None:
            on_attempt_failed(attempt, None)

    raise RetriesExhausted(max_attempts, last_error)
