"""Tests for unicart/common/text_utils.py"""

import pytest

from unicart.common.text_utils import clean_text, get_domain, is_valid_url, resolve_url


class TestCleanText:
    def test_collapses_whitespace(self):
        assert clean_text("  hello \n  world  ") == "hello world"

    def test_none_returns_empty(self):
        assert clean_text(None) == ""


class TestIsValidUrl:
    @pytest.mark.parametrize("url", [
        "https://shop.example/p/1",
        "http://www.shop.example",
        "https://shop.example:8443/p?id=1",
    ])
    def test_valid(self, url):
        assert is_valid_url(url) is True

    @pytest.mark.parametrize("url", [
        "",
        "not a url",
        "/relative/path",
        "ftp://shop.example/file",
        "https://",
        "http://[::1",
        None,
    ])
    def test_invalid(self, url):
        assert is_valid_url(url) is False


class TestGetDomain:
    def test_strips_leading_www(self):
        assert get_domain("https://www.zalando.nl/schoenen") == "zalando.nl"

    def test_keeps_other_subdomains(self):
        assert get_domain("https://shop.www.example.com/") == "shop.www.example.com"

    def test_lowercases_host(self):
        assert get_domain("https://WWW.Bol.COM/nl/p/1") == "bol.com"

    def test_unparsable_returns_none(self):
        assert get_domain("not a url") is None


class TestResolveUrl:
    BASE = "https://www.shop.example/products/mug"

    def test_root_relative(self):
        assert resolve_url("/img/x.jpg", self.BASE) == "https://www.shop.example/img/x.jpg"

    def test_protocol_relative(self):
        assert resolve_url("//cdn.example/x.jpg", self.BASE) == "https://cdn.example/x.jpg"

    def test_path_relative(self):
        assert resolve_url("x.jpg", self.BASE) == "https://www.shop.example/products/x.jpg"

    def test_absolute_unchanged(self):
        assert resolve_url("http://img.example/a.png", self.BASE) == "http://img.example/a.png"

    @pytest.mark.parametrize("raw", ["", None, "javascript:void(0)", "data:image/png;base64,AAAA", "http://[bad"])
    def test_unresolvable_returns_empty(self, raw):
        assert resolve_url(raw, self.BASE) == ""
