"""Shared fakes for broken link checker tests."""

import asyncio

import pytest

from broken_links.config import BrokenLinkCheckerOptions
from broken_links.constants import BLANK_PAGE_URL
from broken_links.infrastructure.page_controller import PageController, PageOpenError
from broken_links.models import NavigationFailure, NavigationResponse


class FakePage:
    """Stand-in for a browser page."""

    def __init__(self, page_id: int, url: str = BLANK_PAGE_URL):
        self.page_id = page_id
        self.url = url
        self.closed = False


class FakePageController(PageController):
    """PageController driven by scripted per-URL outcomes.

    Each script entry is an int (status code), a NavigationFailure, or an
    exception to raise. Entries are consumed in order and the last one
    repeats. Unknown URLs answer 200.
    """

    def __init__(self, scripts=None, delays=None, fail_open_after=None):
        self.scripts = {url: list(steps) for url, steps in (scripts or {}).items()}
        self.delays = delays or {}
        self.fail_open_after = fail_open_after
        self.opened: list[FakePage] = []
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def open(self):
        if self.fail_open_after is not None and len(self.opened) >= self.fail_open_after:
            raise PageOpenError()
        page = FakePage(len(self.opened))
        self.opened.append(page)
        return page

    async def navigate(self, page, url, timeout_ms):
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(url, 0))
        finally:
            self.in_flight -= 1

        if url == BLANK_PAGE_URL:
            page.url = url
            return NavigationResponse(status_code=200)

        steps = self.scripts.get(url, [200])
        step = steps.pop(0) if len(steps) > 1 else steps[0]

        if isinstance(step, Exception):
            raise step
        if isinstance(step, NavigationFailure):
            return step
        page.url = url
        return NavigationResponse(status_code=step)

    def current_url(self, page):
        return page.url

    async def close(self, page):
        page.closed = True


@pytest.fixture
def options():
    """Options with an origin and no retries."""
    return BrokenLinkCheckerOptions(origin_uri="https://example.com/")


@pytest.fixture
def controller():
    """Controller answering 200 for every URL."""
    return FakePageController()


@pytest.fixture
def make_controller():
    """Factory for scripted controllers."""
    return FakePageController


@pytest.fixture
def make_page():
    """Factory for fake pages."""
    return FakePage
