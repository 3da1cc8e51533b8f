"""
Page control capability.

Defines the browser operations the link checker needs (open, navigate,
close) and a Playwright implementation of them. Navigation outcomes are
returned as NavigationResponse / NavigationFailure values, never raised.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable

from playwright.async_api import Browser, Page
from playwright.async_api import Error as PlaywrightError

from broken_links.models import NavigationFailure, NavigationResponse, NavigationResult
from broken_links.constants import (
    NAVIGATION_WAIT_UNTIL,
    NO_RESPONSE_ERROR,
    PAGE_OPEN_ERROR_MESSAGE,
)

logger = logging.getLogger(__name__)


class PageOpenError(Exception):
    """Raised when a new page cannot be allocated."""

    def __init__(self, message: str = PAGE_OPEN_ERROR_MESSAGE):
        self.message = message
        super().__init__(message)


class PageController(ABC):
    """Browser operations consumed by the link checker."""

    @abstractmethod
    async def open(self) -> Any:
        """Allocate a fresh page with caching disabled.

        Raises:
            PageOpenError: If the page cannot be created
        """

    @abstractmethod
    async def navigate(self, page: Any, url: str, timeout_ms: int) -> NavigationResult:
        """Navigate a page to url and report what happened."""

    @abstractmethod
    def current_url(self, page: Any) -> str:
        """URL the page is currently showing."""

    @abstractmethod
    async def close(self, page: Any) -> None:
        """Close a page. Must not raise."""

    async def close_all(self, pages: Iterable[Any]) -> None:
        """Close every page, best effort."""
        await asyncio.gather(
            *(self.close(page) for page in pages), return_exceptions=True
        )


class PlaywrightPageController(PageController):
    """
    PageController backed by a Playwright Chromium browser.

    The browser is owned by the caller; this class only opens and closes
    pages in it.
    """

    def __init__(self, browser: Browser):
        self._browser = browser

    async def open(self) -> Page:
        page = None
        try:
            page = await self._browser.new_page()
            # Chromium only: caching is toggled through the DevTools protocol
            cdp = await page.context.new_cdp_session(page)
            await cdp.send("Network.setCacheDisabled", {"cacheDisabled": True})
            return page
        except Exception as e:
            logger.error(f"Failed to open page: {e}")
            if page is not None:
                await self.close(page)
            raise PageOpenError() from e

    async def navigate(self, page: Page, url: str, timeout_ms: int) -> NavigationResult:
        try:
            response = await page.goto(url, wait_until=NAVIGATION_WAIT_UNTIL, timeout=timeout_ms)
        except PlaywrightError as e:
            return NavigationFailure(reason=e.message, error_type=type(e).__name__)

        if response is None:
            return NavigationFailure(
                reason=f"No response received for {url}",
                error_type=NO_RESPONSE_ERROR,
            )

        return NavigationResponse(status_code=response.status)

    def current_url(self, page: Page) -> str:
        return page.url

    async def close(self, page: Page) -> None:
        try:
            await page.close()
        except Exception as e:
            logger.warning(f"Error closing page: {e}")
