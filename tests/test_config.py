"""Tests for checker options."""

import pytest

from broken_links.config import BrokenLinkCheckerOptions, ConfigurationError
from broken_links.models import LinkOrder, PerLinkOption, ResponseStatusCode, StatusClass


class TestDefaults:
    """Default option values."""

    def test_default_values(self):
        options = BrokenLinkCheckerOptions()

        assert options.link_limit == 10
        assert options.query_selector_all == "a"
        assert options.get_attributes == ["href"]
        assert options.link_order == LinkOrder.SEQUENTIAL
        assert options.link_timeout_millis == 30000
        assert options.max_retries == 0
        assert options.total_synthetic_timeout_millis == 60000
        assert options.page_pool_size == 1
        assert options.per_link_options == {}
        assert options.default_expected_status == ResponseStatusCode(
            status_class=StatusClass.STATUS_CLASS_2XX
        )

    def test_expected_status_for_prefers_per_link_option(self):
        options = BrokenLinkCheckerOptions(
            per_link_options={
                "https://example.com/gone": PerLinkOption(
                    expected_status_code=ResponseStatusCode(status_value=410)
                ),
            },
        )

        assert options.expected_status_for("https://example.com/gone") == ResponseStatusCode(
            status_value=410
        )
        assert options.expected_status_for("https://example.com/other") == (
            options.default_expected_status
        )


class TestValidate:
    """BrokenLinkCheckerOptions.validate()."""

    def test_valid_options(self):
        options = BrokenLinkCheckerOptions(origin_uri="https://example.com/")
        assert options.validate() is options

    @pytest.mark.parametrize("changes,message", [
        ({"origin_uri": ""}, "origin_uri is required"),
        ({"origin_uri": "ftp://example.com"}, "http"),
        ({"link_limit": 0}, "link_limit"),
        ({"max_retries": -1}, "max_retries"),
        ({"page_pool_size": 0}, "page_pool_size"),
        ({"link_timeout_millis": 0}, "link_timeout_millis"),
        ({"link_timeout_millis": 90000}, "exceeds"),
        ({"default_expected_status": ResponseStatusCode()}, "needs status_value"),
        ({"default_expected_status": ResponseStatusCode(status_value=700)}, "status_value"),
    ])
    def test_invalid_options(self, changes, message):
        values = {"origin_uri": "https://example.com/", **changes}
        with pytest.raises(ConfigurationError, match=message):
            BrokenLinkCheckerOptions(**values).validate()

    def test_per_link_key_must_be_url(self):
        options = BrokenLinkCheckerOptions(
            origin_uri="https://example.com/",
            per_link_options={
                "not a url": PerLinkOption(expected_status_code=ResponseStatusCode(status_value=200)),
            },
        )
        with pytest.raises(ConfigurationError, match="not an http"):
            options.validate()

    def test_per_link_expectation_must_be_set(self):
        options = BrokenLinkCheckerOptions(
            origin_uri="https://example.com/",
            per_link_options={
                "https://example.com/a": PerLinkOption(expected_status_code=ResponseStatusCode()),
            },
        )
        with pytest.raises(ConfigurationError):
            options.validate()


class TestLoading:
    """Loading options from dicts, files and the environment."""

    def test_from_dict(self):
        options = BrokenLinkCheckerOptions.from_dict({
            "origin_uri": "https://example.com/",
            "link_limit": 5,
            "link_order": "FIRST_N",
            "max_retries": 2,
            "per_link_options": {
                "https://example.com/missing": {"expected_status_code": {"status_value": 404}},
                "https://example.com/moved": {"expected_status_code": {"status_class": "STATUS_CLASS_3XX"}},
            },
            "unknown_key": True,
        })

        assert options.link_limit == 5
        assert options.link_order == LinkOrder.SEQUENTIAL
        assert options.max_retries == 2
        assert options.expected_status_for("https://example.com/missing").status_value == 404
        assert options.expected_status_for("https://example.com/moved").status_class == (
            StatusClass.STATUS_CLASS_3XX
        )
        options.validate()

    def test_from_dict_bad_link_order(self):
        with pytest.raises(ConfigurationError, match="link_order"):
            BrokenLinkCheckerOptions.from_dict({"link_order": "sideways"})

    def test_from_dict_coerces_numeric_strings(self):
        options = BrokenLinkCheckerOptions.from_dict({
            "origin_uri": "https://example.com/",
            "link_limit": "5",
            "max_retries": "2",
        })

        assert options.link_limit == 5
        assert options.max_retries == 2
        options.validate()

    def test_from_dict_non_numeric_int(self):
        with pytest.raises(ConfigurationError, match="link_limit"):
            BrokenLinkCheckerOptions.from_dict({"link_limit": "five"})

    def test_from_dict_bad_status_class(self):
        with pytest.raises(ConfigurationError):
            BrokenLinkCheckerOptions.from_dict({
                "per_link_options": {
                    "https://example.com/": {"expected_status_code": {"status_class": "STATUS_CLASS_9XX"}},
                },
            })

    def test_file_round_trip(self, tmp_path):
        path = tmp_path / "options.json"
        original = BrokenLinkCheckerOptions(
            origin_uri="https://example.com/",
            link_limit=7,
            link_order=LinkOrder.RANDOM,
            per_link_options={
                "https://example.com/teapot": PerLinkOption(
                    expected_status_code=ResponseStatusCode(status_value=418)
                ),
            },
        )

        original.save_to_file(str(path))
        loaded = BrokenLinkCheckerOptions.from_file(str(path))

        assert loaded == original

    def test_missing_file_gives_defaults(self, tmp_path):
        loaded = BrokenLinkCheckerOptions.from_file(str(tmp_path / "absent.json"))
        assert loaded == BrokenLinkCheckerOptions()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BROKEN_LINKS_ORIGIN_URI", "https://example.org/")
        monkeypatch.setenv("BROKEN_LINKS_LINK_LIMIT", "3")
        monkeypatch.setenv("BROKEN_LINKS_LINK_ORDER", "random")
        monkeypatch.setenv("BROKEN_LINKS_MAX_RETRIES", "1")

        options = BrokenLinkCheckerOptions.from_env()

        assert options.origin_uri == "https://example.org/"
        assert options.link_limit == 3
        assert options.link_order == LinkOrder.RANDOM
        assert options.max_retries == 1

    def test_from_env_invalid_int(self, monkeypatch):
        monkeypatch.setenv("BROKEN_LINKS_LINK_LIMIT", "many")
        with pytest.raises(ConfigurationError, match="BROKEN_LINKS_LINK_LIMIT"):
            BrokenLinkCheckerOptions.from_env()
