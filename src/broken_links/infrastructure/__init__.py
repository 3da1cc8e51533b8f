"""
Infrastructure Package.

Provides the page control capability and the page pool used to bound
concurrent link checks.
"""

from .page_controller import (
    PageController,
    PageOpenError,
    PlaywrightPageController,
)
from .page_pool import (
    PagePool,
    PoolStatus,
)

__all__ = [
    # Page control
    "PageController",
    "PageOpenError",
    "PlaywrightPageController",
    # Page Pool
    "PagePool",
    "PoolStatus",
]
