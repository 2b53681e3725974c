"""Unit tests for proxy pool parsing."""

import pytest

from relay.proxy.pool import DEFAULT_PROXIES, parse_proxy_list


class TestParseProxyList:
    def test_missing_returns_defaults(self):
        assert parse_proxy_list(None) == DEFAULT_PROXIES

    @pytest.mark.parametrize("raw", ["", "   ", "[]", ",", " , ,"])
    def test_empty_content_returns_defaults(self, raw):
        assert parse_proxy_list(raw) == DEFAULT_PROXIES

    def test_json_array(self):
        raw = '["https://a.test/fetch/", "https://b.test/raw?url="]'
        assert parse_proxy_list(raw) == ("https://a.test/fetch/", "https://b.test/raw?url=")

    def test_json_array_preserves_order(self):
        raw = '["https://c.test/", "https://a.test/", "https://b.test/"]'
        assert parse_proxy_list(raw) == ("https://c.test/", "https://a.test/", "https://b.test/")

    def test_json_array_drops_non_strings(self):
        raw = '["https://a.test/", 42, null, "", "https://b.test/"]'
        assert parse_proxy_list(raw) == ("https://a.test/", "https://b.test/")

    def test_comma_separated(self):
        raw = "https://a.test/, https://b.test/ ,,https://c.test/"
        assert parse_proxy_list(raw) == ("https://a.test/", "https://b.test/", "https://c.test/")

    def test_single_entry(self):
        assert parse_proxy_list("https://only.test/") == ("https://only.test/",)

    def test_json_object_treated_as_csv(self):
        # Not an array: falls back to comma splitting of the raw text
        raw = '{"a": 1}'
        assert parse_proxy_list(raw) == ('{"a": 1}',)

    def test_default_pool_is_non_empty(self):
        assert len(DEFAULT_PROXIES) == 8
        assert all(isinstance(p, str) and p for p in DEFAULT_PROXIES)
