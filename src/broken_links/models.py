"""Data models for broken link checking."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class StatusClass(Enum):
    """HTTP status class, valued by its leading digit."""
    STATUS_CLASS_UNSPECIFIED = 0
    STATUS_CLASS_1XX = 1
    STATUS_CLASS_2XX = 2
    STATUS_CLASS_3XX = 3
    STATUS_CLASS_4XX = 4
    STATUS_CLASS_5XX = 5


class LinkOrder(Enum):
    """Policy for picking which extracted links to follow."""
    SEQUENTIAL = "SEQUENTIAL"
    RANDOM = "RANDOM"

    @classmethod
    def parse(cls, value: Union[str, "LinkOrder"]) -> "LinkOrder":
        """Parse a link order name, accepting FIRST_N for SEQUENTIAL."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().upper()
        if name == "FIRST_N":
            return cls.SEQUENTIAL
        return cls(name)


@dataclass(frozen=True)
class Link:
    """A link extracted from the origin page."""

    target_url: str
    anchor_text: str = ""
    html_element: str = ""


@dataclass(frozen=True)
class ResponseStatusCode:
    """Expected HTTP status: an exact code or a status class.

    The exact code takes precedence when both are set.
    """

    status_value: Optional[int] = None
    status_class: Optional[StatusClass] = None

    def to_dict(self) -> dict:
        if self.status_value is not None:
            return {"status_value": self.status_value}
        if self.status_class is not None:
            return {"status_class": self.status_class.name}
        return {}

    @classmethod
    def from_dict(cls, data: dict) -> "ResponseStatusCode":
        status_value = data.get("status_value")
        status_class = data.get("status_class")
        if isinstance(status_class, str):
            status_class = StatusClass[status_class]
        elif isinstance(status_class, int):
            status_class = StatusClass(status_class)
        return cls(
            status_value=int(status_value) if status_value is not None else None,
            status_class=status_class,
        )


@dataclass(frozen=True)
class PerLinkOption:
    """Options overriding the global defaults for one target URL."""

    expected_status_code: ResponseStatusCode

    def to_dict(self) -> dict:
        return {"expected_status_code": self.expected_status_code.to_dict()}


# =============================================================================
# Navigation results (PageController boundary)
# =============================================================================

@dataclass(frozen=True)
class NavigationResponse:
    """A navigation that produced an HTTP response."""

    status_code: int


@dataclass(frozen=True)
class NavigationFailure:
    """A navigation that produced no response."""

    reason: str
    error_type: str = "Error"


NavigationResult = Union[NavigationResponse, NavigationFailure]


@dataclass(frozen=True)
class NavigationOutcome:
    """Final outcome of navigating one link, retries included."""

    target_url: str
    result: NavigationResult
    start_time: str
    end_time: str
    passed: bool
    retries_remaining: int

    @property
    def status_code(self) -> Optional[int]:
        """Response status code, None when the link was unreachable."""
        if isinstance(self.result, NavigationResponse):
            return self.result.status_code
        return None


# =============================================================================
# Report models
# =============================================================================

@dataclass(frozen=True)
class SyntheticLinkResult:
    """Result of fully evaluating one link (origin or followed)."""

    link_passed: bool
    target_uri: str
    expected_status_code: Optional[ResponseStatusCode] = None
    source_uri: str = ""
    html_element: str = ""
    anchor_text: str = ""
    status_code: Optional[int] = None
    error_type: str = ""
    error_message: str = ""
    link_start_time: str = ""
    link_end_time: str = ""
    is_origin: bool = False

    def to_dict(self) -> dict:
        return {
            "link_passed": self.link_passed,
            "expected_status_code": (
                self.expected_status_code.to_dict()
                if self.expected_status_code else None
            ),
            "source_uri": self.source_uri,
            "target_uri": self.target_uri,
            "html_element": self.html_element,
            "anchor_text": self.anchor_text,
            "status_code": self.status_code,
            "error_type": self.error_type,
            "error_message": self.error_message,
            "link_start_time": self.link_start_time,
            "link_end_time": self.link_end_time,
            "is_origin": self.is_origin,
        }


@dataclass(frozen=True)
class BrokenLinksResult:
    """Aggregated statistics over every checked link."""

    link_count: int = 0
    passing_link_count: int = 0
    failing_link_count: int = 0
    unreachable_count: int = 0
    status_2xx_count: int = 0
    status_3xx_count: int = 0
    status_4xx_count: int = 0
    status_5xx_count: int = 0
    options: Optional[Any] = None
    origin_link_result: Optional[SyntheticLinkResult] = None
    followed_link_results: tuple[SyntheticLinkResult, ...] = ()

    def to_dict(self) -> dict:
        return {
            "link_count": self.link_count,
            "passing_link_count": self.passing_link_count,
            "failing_link_count": self.failing_link_count,
            "unreachable_count": self.unreachable_count,
            "status_2xx_count": self.status_2xx_count,
            "status_3xx_count": self.status_3xx_count,
            "status_4xx_count": self.status_4xx_count,
            "status_5xx_count": self.status_5xx_count,
            "options": self.options.to_dict() if self.options is not None else None,
            "origin_link_result": (
                self.origin_link_result.to_dict()
                if self.origin_link_result else None
            ),
            "followed_link_results": [r.to_dict() for r in self.followed_link_results],
        }


@dataclass(frozen=True)
class SyntheticResult:
    """Top-level envelope handed to the monitoring backend."""

    synthetic_broken_links_result_v1: BrokenLinksResult
    start_time: str
    end_time: str
    runtime_metadata: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "synthetic_broken_links_result_v1": self.synthetic_broken_links_result_v1.to_dict(),
            "runtime_metadata": dict(self.runtime_metadata),
            "start_time": self.start_time,
            "end_time": self.end_time,
        }
