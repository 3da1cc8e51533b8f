"""HTTP status evaluation against configured expectations."""

from typing import Optional

from broken_links.models import ResponseStatusCode, StatusClass
from broken_links.constants import (
    MIN_HTTP_STATUS,
    MAX_HTTP_STATUS,
    STATUS_BUCKETS,
    UNREACHABLE_BUCKET,
)


def is_passing(expected: Optional[ResponseStatusCode], actual: int) -> bool:
    """Check whether a status code satisfies an expectation.

    An exact status_value wins over status_class. A missing or unspecified
    expectation never passes.

    Args:
        expected: Expected status code or class
        actual: Observed HTTP status code

    Returns:
        True if the status code is passing
    """
    if expected is None:
        return False

    if expected.status_value is not None:
        return actual == expected.status_value

    status_class = expected.status_class
    if status_class is None or status_class == StatusClass.STATUS_CLASS_UNSPECIFIED:
        return False

    low = status_class.value * 100
    return low <= actual <= low + 99


def status_bucket(status_code: Optional[int]) -> str:
    """Report bucket for a status code ("2xx".."5xx" or "unreachable")."""
    if status_code is None or not MIN_HTTP_STATUS <= status_code <= MAX_HTTP_STATUS:
        return UNREACHABLE_BUCKET
    return STATUS_BUCKETS.get(status_code // 100, UNREACHABLE_BUCKET)


def describe_expectation(expected: Optional[ResponseStatusCode]) -> str:
    """Human readable form of an expectation, e.g. "404" or "2xx"."""
    if expected is None:
        return "unspecified"
    if expected.status_value is not None:
        return str(expected.status_value)
    if expected.status_class is None or expected.status_class == StatusClass.STATUS_CLASS_UNSPECIFIED:
        return "unspecified"
    return f"{expected.status_class.value}xx"
