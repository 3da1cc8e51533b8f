"""Broken link check for one origin page."""

import logging
import random
import time
from typing import Optional, Sequence

from broken_links.aggregator import create_synthetic_result
from broken_links.config import BrokenLinkCheckerOptions
from broken_links.infrastructure.page_controller import PageController
from broken_links.infrastructure.page_pool import PagePool
from broken_links.models import Link, SyntheticResult
from broken_links.navigation import NavigationCoordinator
from broken_links.selection import select_links
from broken_links.utils import iso_now

logger = logging.getLogger(__name__)


class BrokenLinkChecker:
    """Checks an origin page and a bounded subset of its extracted links.

    The origin is checked first on a pooled page, then the selected links
    are followed concurrently. Individual link failures end up in the
    report; only page allocation failures (PageOpenError) abort the check.
    """

    def __init__(
        self,
        controller: PageController,
        options: BrokenLinkCheckerOptions,
        rng: Optional[random.Random] = None,
    ):
        """Initialize checker.

        Args:
            controller: Browser capability used to open and navigate pages
            options: Scan options, validated here
            rng: Random source for RANDOM link order

        Raises:
            ConfigurationError: If options are invalid
        """
        self.controller = controller
        self.options = options.validate()
        self.rng = rng
        self.coordinator = NavigationCoordinator(controller, self.options)

    async def check(
        self,
        links: Sequence[Link],
        start_time: Optional[str] = None,
        runtime_metadata: Optional[dict[str, str]] = None,
    ) -> SyntheticResult:
        """Run the check.

        Args:
            links: Links extracted from the origin page, in page order
            start_time: Scan start time (ISO format), defaults to now
            runtime_metadata: Opaque metadata copied into the result

        Returns:
            SyntheticResult for the scan
        """
        started = time.monotonic()
        start_time = start_time or iso_now()
        origin = Link(target_url=self.options.origin_uri)
        selected = select_links(links, self.options.link_limit, self.options.link_order, self.rng)

        logger.info(
            f"Checking {self.options.origin_uri} and {len(selected)} of "
            f"{len(links)} extracted links"
        )

        async with PagePool(self.controller, self.options.page_pool_size) as pool:
            async with pool.acquire() as page:
                origin_result = await self.coordinator.follow_link(origin, page, is_origin=True)
            followed_results = await self.coordinator.check_links(selected, pool)

        result = create_synthetic_result(
            start_time,
            runtime_metadata or {},
            self.options,
            [origin_result, *followed_results],
        )

        elapsed = time.monotonic() - started
        logger.info(f"Broken link check finished in {elapsed:.2f}s")
        return result
