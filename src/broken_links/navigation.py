"""Navigation of individual links with retries and pass/fail classification."""

import asyncio
import logging
from enum import Enum
from typing import Any, Optional, Sequence
from urllib.parse import urldefrag

from broken_links.config import BrokenLinkCheckerOptions
from broken_links.infrastructure.page_controller import PageController
from broken_links.infrastructure.page_pool import PagePool
from broken_links.models import (
    Link,
    NavigationFailure,
    NavigationOutcome,
    NavigationResponse,
    NavigationResult,
    SyntheticLinkResult,
)
from broken_links.status import describe_expectation, is_passing
from broken_links.utils import iso_now
from broken_links.constants import (
    BLANK_PAGE_URL,
    BLANK_PAGE_TIMEOUT_MILLIS,
    INCORRECT_STATUS_CODE_ERROR,
)

logger = logging.getLogger(__name__)


class NavigationState(Enum):
    """Lifecycle of one link check."""
    PENDING = "pending"
    NAVIGATING = "navigating"
    RETRYING = "retrying"
    PASSED = "passed"
    FAILED = "failed"


def should_go_to_blank_page(current_url: str, target_url: str) -> bool:
    """Whether navigating to target_url needs a blank page hop first.

    Browsers treat a move between fragments of the same document as a
    same-document navigation and produce no response, so the page is sent
    to a blank page first.

    Example:
        should_go_to_blank_page("https://a/x#1", "https://a/x#2")  # True
        should_go_to_blank_page("https://a/x", "https://b/y")      # False
    """
    if "#" not in target_url:
        return False
    target_base, _ = urldefrag(target_url)
    current_base, _ = urldefrag(current_url)
    return current_base == target_base


class NavigationCoordinator:
    """Drives link navigation through a PageController.

    Each link gets up to ``max_retries + 1`` attempts. A navigation failure
    or a status that does not match the expected status uses up an attempt;
    running out of attempts yields a failing result, never an exception.
    """

    def __init__(self, controller: PageController, options: BrokenLinkCheckerOptions):
        self.controller = controller
        self.options = options

    async def navigate(self, link: Link, page: Any) -> NavigationOutcome:
        """Navigate to a link, retrying until it passes or attempts run out."""
        expected = self.options.expected_status_for(link.target_url)
        retries_remaining = self.options.max_retries
        state = NavigationState.PENDING

        while True:
            state = self._transition(link, state, NavigationState.NAVIGATING)
            await self._prepare_page(page, link.target_url)

            start_time = iso_now()
            result = await self._attempt(page, link.target_url)
            end_time = iso_now()

            passed = isinstance(result, NavigationResponse) and is_passing(
                expected, result.status_code
            )
            if passed:
                state = self._transition(link, state, NavigationState.PASSED)
                break

            if retries_remaining > 0:
                retries_remaining -= 1
                state = self._transition(link, state, NavigationState.RETRYING)
                logger.info(
                    f"Retrying {link.target_url} ({_describe_result(result)}), "
                    f"{retries_remaining} retries left"
                )
                continue

            state = self._transition(link, state, NavigationState.FAILED)
            break

        return NavigationOutcome(
            target_url=link.target_url,
            result=result,
            start_time=start_time,
            end_time=end_time,
            passed=passed,
            retries_remaining=retries_remaining,
        )

    async def follow_link(
        self,
        link: Link,
        page: Any,
        is_origin: bool = False,
        source_uri: Optional[str] = None,
    ) -> SyntheticLinkResult:
        """Check one link and build its report entry.

        Args:
            link: Link to check
            page: Page to navigate with
            is_origin: Whether the link is the page under test
            source_uri: Page the link was found on (defaults to origin_uri)

        Returns:
            SyntheticLinkResult for the link
        """
        expected = self.options.expected_status_for(link.target_url)
        outcome = await self.navigate(link, page)

        error_type = ""
        error_message = ""
        if not outcome.passed:
            if isinstance(outcome.result, NavigationFailure):
                error_type = outcome.result.error_type
                error_message = outcome.result.reason
            else:
                error_type = INCORRECT_STATUS_CODE_ERROR
                error_message = (
                    f"{link.target_url} returned status code {outcome.status_code}, "
                    f"expected {describe_expectation(expected)}"
                )
            logger.warning(f"Link failed: {link.target_url} ({error_type}: {error_message})")

        return SyntheticLinkResult(
            link_passed=outcome.passed,
            expected_status_code=expected,
            source_uri=self.options.origin_uri if source_uri is None else source_uri,
            target_uri=link.target_url,
            html_element=link.html_element,
            anchor_text=link.anchor_text,
            status_code=outcome.status_code,
            error_type=error_type,
            error_message=error_message,
            link_start_time=outcome.start_time,
            link_end_time=outcome.end_time,
            is_origin=is_origin,
        )

    async def check_links(self, links: Sequence[Link], pool: PagePool) -> list[SyntheticLinkResult]:
        """Follow links concurrently, one pooled page per link.

        Results are returned in the order of ``links``.
        """
        async def check(link: Link) -> SyntheticLinkResult:
            async with pool.acquire() as page:
                return await self.follow_link(link, page)

        return list(await asyncio.gather(*(check(link) for link in links)))

    async def _prepare_page(self, page: Any, target_url: str) -> None:
        if not should_go_to_blank_page(self.controller.current_url(page), target_url):
            return
        logger.debug(f"Visiting {BLANK_PAGE_URL} before fragment navigation to {target_url}")
        result = await self._attempt(page, BLANK_PAGE_URL, BLANK_PAGE_TIMEOUT_MILLIS)
        if isinstance(result, NavigationFailure):
            logger.debug(f"Blank page navigation failed: {result.reason}")

    async def _attempt(self, page: Any, url: str, timeout_ms: Optional[int] = None) -> NavigationResult:
        if timeout_ms is None:
            timeout_ms = self.options.link_timeout_millis
        try:
            return await self.controller.navigate(page, url, timeout_ms)
        except Exception as e:
            return NavigationFailure(reason=str(e), error_type=type(e).__name__)

    @staticmethod
    def _transition(link: Link, current: NavigationState, new: NavigationState) -> NavigationState:
        logger.debug(f"{link.target_url}: {current.value} -> {new.value}")
        return new


def _describe_result(result: NavigationResult) -> str:
    if isinstance(result, NavigationResponse):
        return f"status {result.status_code}"
    return f"{result.error_type}: {result.reason}"
