"""
Page Pool Management.

Bounds the number of browser pages used concurrently to follow links.
Pages are opened once, handed out through acquire() and reused; teardown
closes every page and never raises.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from broken_links.constants import DEFAULT_PAGE_POOL_SIZE
from broken_links.infrastructure.page_controller import PageController

logger = logging.getLogger(__name__)


@dataclass
class PoolStatus:
    """Current status of the page pool."""
    total_size: int
    available: int
    in_use: int
    total_acquisitions: int
    uptime_seconds: float


class PagePool:
    """
    Fixed-size pool of pages opened through a PageController.

    Usage:
        async with PagePool(controller, max_size=4) as pool:
            async with pool.acquire() as page:
                ...
    """

    def __init__(self, controller: PageController, max_size: int = DEFAULT_PAGE_POOL_SIZE):
        """
        Initialize page pool.

        Args:
            controller: Capability used to open and close pages
            max_size: Maximum number of pages in use at once
        """
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")

        self.controller = controller
        self.max_size = max_size

        self._pages: list[Any] = []
        self._available: asyncio.Queue = asyncio.Queue()
        self._started = False
        self._start_time: datetime | None = None
        self._total_acquisitions = 0

    async def start(self) -> None:
        """
        Open all pages.

        Raises:
            PageOpenError: If a page cannot be opened. Pages opened so far
                are closed before the error propagates.
        """
        if self._started:
            return

        try:
            for _ in range(self.max_size):
                page = await self.controller.open()
                self._pages.append(page)
                await self._available.put(page)
        except Exception:
            await self.close_all()
            raise

        self._start_time = datetime.now()
        self._started = True
        logger.info(f"Page pool started with {self.max_size} pages")

    async def close_all(self) -> None:
        """
        Close every pooled page.

        Close failures are logged by the controller and never propagate.
        """
        pages = list(self._pages)
        self._pages.clear()
        while not self._available.empty():
            self._available.get_nowait()

        try:
            await self.controller.close_all(pages)
        except Exception as e:
            logger.warning(f"Error closing page pool: {e}")

        if self._started:
            logger.info("Page pool stopped")
        self._started = False

    @asynccontextmanager
    async def acquire(self):
        """
        Acquire a page, waiting until one is free.

        The page goes back to the pool on every exit path.

        Yields:
            A page opened by the controller
        """
        if not self._started:
            raise RuntimeError("Page pool not started. Call start() first.")

        page = await self._available.get()
        self._total_acquisitions += 1
        try:
            yield page
        finally:
            await self._available.put(page)

    def get_status(self) -> PoolStatus:
        """Get current pool status."""
        uptime = 0.0
        if self._start_time:
            uptime = (datetime.now() - self._start_time).total_seconds()

        return PoolStatus(
            total_size=len(self._pages),
            available=self._available.qsize(),
            in_use=len(self._pages) - self._available.qsize(),
            total_acquisitions=self._total_acquisitions,
            uptime_seconds=uptime,
        )

    @property
    def available_count(self) -> int:
        """Number of free pages."""
        return self._available.qsize()

    @property
    def is_started(self) -> bool:
        """Whether pool has been started."""
        return self._started

    async def __aenter__(self) -> "PagePool":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close_all()
