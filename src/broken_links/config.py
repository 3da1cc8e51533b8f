from dotenv import load_dotenv
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path
from urllib.parse import urlparse
import json
import os

from broken_links.constants import (
    DEFAULT_LINK_LIMIT,
    DEFAULT_QUERY_SELECTOR_ALL,
    DEFAULT_GET_ATTRIBUTES,
    DEFAULT_LINK_TIMEOUT_MILLIS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_TOTAL_SYNTHETIC_TIMEOUT_MILLIS,
    DEFAULT_PAGE_POOL_SIZE,
    MIN_HTTP_STATUS,
    MAX_HTTP_STATUS,
)
from broken_links.models import (
    LinkOrder,
    PerLinkOption,
    ResponseStatusCode,
    StatusClass,
)

load_dotenv()  # Loads variables from .env file


class ConfigurationError(Exception):
    """Raised when checker options are invalid."""


class Settings:
    """
    Manages process settings loaded from environment variables.
    """
    LOG_LEVEL = os.getenv("BROKEN_LINKS_LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("BROKEN_LINKS_LOG_FILE")


settings = Settings()


def _default_expected_status() -> ResponseStatusCode:
    return ResponseStatusCode(status_class=StatusClass.STATUS_CLASS_2XX)


@dataclass
class BrokenLinkCheckerOptions:
    """Options for one broken link scan."""
    origin_uri: str = ""
    link_limit: int = DEFAULT_LINK_LIMIT
    query_selector_all: str = DEFAULT_QUERY_SELECTOR_ALL
    get_attributes: list[str] = field(default_factory=lambda: list(DEFAULT_GET_ATTRIBUTES))
    link_order: LinkOrder = LinkOrder.SEQUENTIAL
    link_timeout_millis: int = DEFAULT_LINK_TIMEOUT_MILLIS
    max_retries: int = DEFAULT_MAX_RETRIES
    max_redirects: int = DEFAULT_MAX_REDIRECTS  # Not enforced by the core
    wait_for_selector: str = ""
    per_link_options: dict[str, PerLinkOption] = field(default_factory=dict)
    total_synthetic_timeout_millis: int = DEFAULT_TOTAL_SYNTHETIC_TIMEOUT_MILLIS
    page_pool_size: int = DEFAULT_PAGE_POOL_SIZE
    default_expected_status: ResponseStatusCode = field(default_factory=_default_expected_status)

    def expected_status_for(self, target_url: str) -> ResponseStatusCode:
        """Expected status for a link, per-link option first."""
        per_link = self.per_link_options.get(target_url)
        if per_link is not None:
            return per_link.expected_status_code
        return self.default_expected_status

    def validate(self) -> "BrokenLinkCheckerOptions":
        """Check option values.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigurationError: If any option is invalid
        """
        if not self.origin_uri:
            raise ConfigurationError("origin_uri is required")
        if not _is_http_url(self.origin_uri):
            raise ConfigurationError(f"origin_uri must be an http(s) URL, got {self.origin_uri!r}")
        if self.link_limit < 1:
            raise ConfigurationError(f"link_limit must be >= 1, got {self.link_limit}")
        if self.max_retries < 0:
            raise ConfigurationError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.page_pool_size < 1:
            raise ConfigurationError(f"page_pool_size must be >= 1, got {self.page_pool_size}")
        if self.link_timeout_millis <= 0:
            raise ConfigurationError(
                f"link_timeout_millis must be > 0, got {self.link_timeout_millis}"
            )
        if self.link_timeout_millis > self.total_synthetic_timeout_millis:
            raise ConfigurationError(
                f"link_timeout_millis ({self.link_timeout_millis}) exceeds "
                f"total_synthetic_timeout_millis ({self.total_synthetic_timeout_millis})"
            )

        _validate_expectation(self.default_expected_status, "default_expected_status")
        for url, option in self.per_link_options.items():
            if not _is_http_url(url):
                raise ConfigurationError(f"per_link_options key is not an http(s) URL: {url!r}")
            _validate_expectation(option.expected_status_code, f"per_link_options[{url!r}]")

        return self

    @classmethod
    def from_dict(cls, data: dict) -> "BrokenLinkCheckerOptions":
        """Build options from a plain dictionary, ignoring unknown keys."""
        options = cls()
        for field_name in options.__dataclass_fields__:
            if field_name not in data:
                continue
            value = data[field_name]
            field_type = options.__dataclass_fields__[field_name].type
            if field_type in (int, "int"):
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    raise ConfigurationError(f"{field_name} must be an integer, got {value!r}")
            elif field_name == "link_order":
                try:
                    value = LinkOrder.parse(value)
                except ValueError:
                    raise ConfigurationError(f"Unknown link_order: {value!r}")
            elif field_name == "per_link_options":
                value = {
                    url: PerLinkOption(
                        expected_status_code=_parse_expectation(
                            opt.get("expected_status_code", {}), url
                        )
                    )
                    for url, opt in value.items()
                }
            elif field_name == "default_expected_status":
                value = _parse_expectation(value, field_name)
            elif field_name == "get_attributes":
                value = list(value)
            setattr(options, field_name, value)
        return options

    @classmethod
    def from_env(cls) -> "BrokenLinkCheckerOptions":
        """Load options from environment variables.

        Environment variables are prefixed with BROKEN_LINKS_
        e.g., BROKEN_LINKS_LINK_LIMIT=25

        Returns:
            BrokenLinkCheckerOptions with values from environment
        """
        options = cls()
        prefix = "BROKEN_LINKS_"

        for field_name in options.__dataclass_fields__:
            env_value = os.getenv(f"{prefix}{field_name.upper()}")
            if env_value is None:
                continue

            field_type = options.__dataclass_fields__[field_name].type
            try:
                if field_type in (int, "int"):
                    setattr(options, field_name, int(env_value))
                elif field_type in (str, "str"):
                    setattr(options, field_name, env_value)
                elif field_name == "link_order":
                    setattr(options, field_name, LinkOrder.parse(env_value))
            except ValueError:
                raise ConfigurationError(f"Invalid value for {prefix}{field_name.upper()}: {env_value!r}")

        return options

    @classmethod
    def from_file(cls, path: str) -> "BrokenLinkCheckerOptions":
        """Load options from a JSON configuration file.

        Args:
            path: Path to JSON configuration file

        Returns:
            BrokenLinkCheckerOptions with values from file
        """
        file_path = Path(path)

        if not file_path.exists():
            return cls()

        with open(file_path, 'r') as f:
            config = json.load(f)

        return cls.from_dict(config.get('options', config))

    def to_dict(self) -> dict:
        """Convert options to a JSON-ready dictionary."""
        return {
            "origin_uri": self.origin_uri,
            "link_limit": self.link_limit,
            "query_selector_all": self.query_selector_all,
            "get_attributes": list(self.get_attributes),
            "link_order": self.link_order.value,
            "link_timeout_millis": self.link_timeout_millis,
            "max_retries": self.max_retries,
            "max_redirects": self.max_redirects,
            "wait_for_selector": self.wait_for_selector,
            "per_link_options": {
                url: option.to_dict() for url, option in self.per_link_options.items()
            },
            "total_synthetic_timeout_millis": self.total_synthetic_timeout_millis,
            "page_pool_size": self.page_pool_size,
            "default_expected_status": self.default_expected_status.to_dict(),
        }

    def save_to_file(self, path: str) -> None:
        """Save current options to a JSON file.

        Args:
            path: Path to save configuration
        """
        with open(path, 'w') as f:
            json.dump({'options': self.to_dict()}, f, indent=2)


def _is_http_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _parse_expectation(data: dict, label: str) -> ResponseStatusCode:
    try:
        return ResponseStatusCode.from_dict(data)
    except (KeyError, ValueError, TypeError) as e:
        raise ConfigurationError(f"{label}: invalid expected status {data!r} ({e})")


def _validate_expectation(expected: Optional[ResponseStatusCode], label: str) -> None:
    if expected is None:
        raise ConfigurationError(f"{label}: expected status is missing")
    if expected.status_value is not None:
        if not MIN_HTTP_STATUS <= expected.status_value <= MAX_HTTP_STATUS:
            raise ConfigurationError(
                f"{label}: status_value must be in {MIN_HTTP_STATUS}-{MAX_HTTP_STATUS}, "
                f"got {expected.status_value}"
            )
        return
    if expected.status_class in (None, StatusClass.STATUS_CLASS_UNSPECIFIED):
        raise ConfigurationError(f"{label}: needs status_value or status_class")
