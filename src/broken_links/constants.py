# src/broken_links/constants.py
"""Centralized constants for the broken link checker.

For user-configurable values, see config.py and BrokenLinkCheckerOptions.
"""

# =============================================================================
# Option Defaults
# =============================================================================

# Number of links checked per scan, origin included
DEFAULT_LINK_LIMIT = 10

# Selector used by the extraction step to find candidate links
DEFAULT_QUERY_SELECTOR_ALL = "a"

# Element attributes read by the extraction step
DEFAULT_GET_ATTRIBUTES = ("href",)

# Per-link navigation timeout (milliseconds)
DEFAULT_LINK_TIMEOUT_MILLIS = 30000

# Additional attempts after the first failed navigation
DEFAULT_MAX_RETRIES = 0

DEFAULT_MAX_REDIRECTS = 10

# Whole scan timeout (milliseconds)
DEFAULT_TOTAL_SYNTHETIC_TIMEOUT_MILLIS = 60000

# Concurrent pages used to follow links
DEFAULT_PAGE_POOL_SIZE = 1


# =============================================================================
# Navigation Constants
# =============================================================================

# Neutral page used to force a real navigation event between fragments
BLANK_PAGE_URL = "about:blank"

# Playwright load state awaited by page.goto
NAVIGATION_WAIT_UNTIL = "load"

# Timeout for the blank page hop (milliseconds)
BLANK_PAGE_TIMEOUT_MILLIS = 5000


# =============================================================================
# Status Classification Constants
# =============================================================================

MIN_HTTP_STATUS = 100
MAX_HTTP_STATUS = 599

# Report buckets, keyed by status_code // 100
STATUS_BUCKETS = {
    2: "2xx",
    3: "3xx",
    4: "4xx",
    5: "5xx",
}
UNREACHABLE_BUCKET = "unreachable"


# =============================================================================
# Error Reporting Constants
# =============================================================================

# error_type recorded when a response arrives with the wrong status
INCORRECT_STATUS_CODE_ERROR = "BrokenLinksSynthetic_IncorrectStatusCode"

# error_type recorded when navigation yields no response at all
NO_RESPONSE_ERROR = "BrokenLinksSynthetic_NoResponse"

# Generic message for page allocation failures
PAGE_OPEN_ERROR_MESSAGE = "An error occurred while opening a new page."
