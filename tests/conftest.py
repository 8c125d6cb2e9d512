"""Shared test fixtures."""

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from unicart.extraction.fetcher import FetchResult
from unicart.models import EnrichStatus, ProductRecord

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


class FakeFetcher:
    """Fetcher that serves canned HTML per URL and records calls."""

    def __init__(self, pages=None, error=None):
        self.pages = pages or {}
        self.error = error
        self.calls = []

    def fetch(self, url: str) -> FetchResult:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return FetchResult(url=url, status_code=200, text=self.pages.get(url, ""), final_url=url)


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def jsonld_page_html():
    return load_fixture("jsonld_product_page.html")


@pytest.fixture
def graph_page_html():
    return load_fixture("graph_product_page.html")


@pytest.fixture
def og_page_html():
    return load_fixture("og_only_page.html")


@pytest.fixture
def bare_page_html():
    return load_fixture("bare_page.html")


@pytest.fixture
def heuristics_page_html():
    return load_fixture("heuristics_page.html")


@pytest.fixture
def make_soup():
    """Build an lxml-backed soup from an HTML string."""
    def _make(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "lxml")
    return _make


@pytest.fixture
def ok_record():
    return ProductRecord(
        source_url="https://www.shop.example/p/1",
        domain="shop.example",
        status=EnrichStatus.OK,
        title="Retro Sneaker Wit",
        image_url="https://cdn.shop.example/sneaker-1.jpg",
        price=89.95,
        currency="EUR",
    )


@pytest.fixture
def failed_record():
    return ProductRecord(
        source_url="https://www.shop.example/p/1",
        domain="shop.example",
        status=EnrichStatus.FAILED,
        error_reason="HTTP 403",
    )


@pytest.fixture
def fake_fetcher():
    """Factory for FakeFetcher instances."""
    return FakeFetcher
