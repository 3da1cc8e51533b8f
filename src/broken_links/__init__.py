"""Broken link checking for synthetic monitoring."""

__version__ = "0.1.0"

from broken_links.models import (
    Link,
    LinkOrder,
    StatusClass,
    ResponseStatusCode,
    PerLinkOption,
    NavigationResponse,
    NavigationFailure,
    NavigationOutcome,
    SyntheticLinkResult,
    BrokenLinksResult,
    SyntheticResult,
)
from broken_links.config import BrokenLinkCheckerOptions, ConfigurationError, settings
from broken_links.logging_config import setup_logging, get_logger
from broken_links.status import is_passing
from broken_links.selection import select_links
from broken_links.navigation import NavigationCoordinator, should_go_to_blank_page
from broken_links.aggregator import AggregationError, aggregate, create_synthetic_result
from broken_links.checker import BrokenLinkChecker

from broken_links.infrastructure import (
    PageController,
    PageOpenError,
    PlaywrightPageController,
    PagePool,
    PoolStatus,
)

__all__ = [
    # Core
    "BrokenLinkChecker",
    "NavigationCoordinator",
    "is_passing",
    "select_links",
    "should_go_to_blank_page",
    "aggregate",
    "create_synthetic_result",
    # Models
    "Link",
    "LinkOrder",
    "StatusClass",
    "ResponseStatusCode",
    "PerLinkOption",
    "NavigationResponse",
    "NavigationFailure",
    "NavigationOutcome",
    "SyntheticLinkResult",
    "BrokenLinksResult",
    "SyntheticResult",
    # Config
    "BrokenLinkCheckerOptions",
    "ConfigurationError",
    "AggregationError",
    "settings",
    "setup_logging",
    "get_logger",
    # Infrastructure
    "PageController",
    "PageOpenError",
    "PlaywrightPageController",
    "PagePool",
    "PoolStatus",
]
