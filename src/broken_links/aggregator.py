"""Aggregation of per-link results into the broken links report."""

import logging
from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable, Optional

from broken_links.config import BrokenLinkCheckerOptions
from broken_links.models import BrokenLinksResult, SyntheticLinkResult, SyntheticResult
from broken_links.status import status_bucket
from broken_links.utils import iso_now

logger = logging.getLogger(__name__)


class AggregationError(Exception):
    """Raised when link results cannot form a single report."""


@dataclass(frozen=True)
class _Tally:
    """Immutable accumulator threaded through the reduction."""
    link_count: int = 0
    passing: int = 0
    failing: int = 0
    unreachable: int = 0
    status_2xx: int = 0
    status_3xx: int = 0
    status_4xx: int = 0
    status_5xx: int = 0
    origin: Optional[SyntheticLinkResult] = None
    followed: tuple[SyntheticLinkResult, ...] = ()


_BUCKET_FIELDS = {
    "2xx": "status_2xx",
    "3xx": "status_3xx",
    "4xx": "status_4xx",
    "5xx": "status_5xx",
    "unreachable": "unreachable",
}


def _fold(tally: _Tally, result: SyntheticLinkResult) -> _Tally:
    if result.is_origin:
        if tally.origin is not None:
            raise AggregationError(
                f"More than one origin link result: {tally.origin.target_uri} "
                f"and {result.target_uri}"
            )
        placed = {"origin": result}
    else:
        placed = {"followed": tally.followed + (result,)}

    bucket = _BUCKET_FIELDS[status_bucket(result.status_code)]

    return replace(
        tally,
        link_count=tally.link_count + 1,
        passing=tally.passing + (1 if result.link_passed else 0),
        failing=tally.failing + (0 if result.link_passed else 1),
        **{bucket: getattr(tally, bucket) + 1},
        **placed,
    )


def aggregate(
    results: Iterable[SyntheticLinkResult],
    options: Optional[BrokenLinkCheckerOptions] = None,
) -> BrokenLinksResult:
    """Fold link results into summary counters.

    Followed link results keep their input order. Status codes are bucketed
    by ``status_code // 100``; a missing code or one outside 100-599 counts
    as unreachable.

    Args:
        results: Origin and followed link results
        options: Options the scan ran with, copied into the report

    Returns:
        BrokenLinksResult with counters, origin and followed results

    Raises:
        AggregationError: If more than one result is marked as origin
    """
    tally = reduce(_fold, results, _Tally())

    if tally.origin is None:
        logger.warning("No origin link result found; origin_link_result left empty")

    return BrokenLinksResult(
        link_count=tally.link_count,
        passing_link_count=tally.passing,
        failing_link_count=tally.failing,
        unreachable_count=tally.unreachable,
        status_2xx_count=tally.status_2xx,
        status_3xx_count=tally.status_3xx,
        status_4xx_count=tally.status_4xx,
        status_5xx_count=tally.status_5xx,
        options=options,
        origin_link_result=tally.origin,
        followed_link_results=tally.followed,
    )


def create_synthetic_result(
    start_time: str,
    runtime_metadata: dict[str, str],
    options: BrokenLinkCheckerOptions,
    results: Iterable[SyntheticLinkResult],
) -> SyntheticResult:
    """Build the envelope for a finished scan.

    Args:
        start_time: Scan start time in ISO format
        runtime_metadata: Opaque metadata passed through to the backend
        options: Options the scan ran with
        results: Origin and followed link results

    Returns:
        SyntheticResult whose end_time is stamped now
    """
    report = aggregate(results, options)
    synthetic_result = SyntheticResult(
        synthetic_broken_links_result_v1=report,
        runtime_metadata=dict(runtime_metadata),
        start_time=start_time,
        end_time=iso_now(),
    )

    logger.info(
        f"Checked {report.link_count} links: {report.passing_link_count} passing, "
        f"{report.failing_link_count} failing, {report.unreachable_count} unreachable"
    )
    return synthetic_result
