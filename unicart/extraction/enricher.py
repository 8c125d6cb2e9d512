"""
Product Enricher

Turns a product URL into a ProductRecord: fetches the page, runs every
extraction strategy over one parsed document, and merges their candidates
field by field in a fixed priority order.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Callable, Dict, Iterable, List, Tuple

from bs4 import BeautifulSoup

from ..common.text_utils import get_domain, is_valid_url, resolve_url
from ..models import EnrichStatus, ExtractionCandidate, ProductRecord
from .errors import EnrichmentError, InvalidUrlError, NoProductDataError
from .fetcher import PageFetcher
from .parsers import extract_from_html_signals, extract_from_jsonld

logger = logging.getLogger(__name__)

UNKNOWN_DOMAIN = "unknown"

Strategy = Callable[[BeautifulSoup, str], ExtractionCandidate]


def _structured_data(soup: BeautifulSoup, page_url: str) -> ExtractionCandidate:
    return extract_from_jsonld(soup)


def _html_signals(soup: BeautifulSoup, page_url: str) -> ExtractionCandidate:
    return extract_from_html_signals(soup, page_url)


# Highest priority first
EXTRACTION_STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("json-ld", _structured_data),
    ("html", _html_signals),
)

CANDIDATE_FIELDS = tuple(f.name for f in fields(ExtractionCandidate))


def _is_filled(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def merge_candidates(
    named_candidates: Iterable[Tuple[str, ExtractionCandidate]],
) -> Tuple[ExtractionCandidate, Dict[str, str]]:
    """
    Merge candidates field by field; the first non-empty value wins.

    Args:
        named_candidates: (source_name, candidate) pairs, highest priority first

    Returns:
        Tuple of (merged candidate, {field: source_name})
    """
    merged = ExtractionCandidate()
    sources: Dict[str, str] = {}

    for source, candidate in named_candidates:
        for name in CANDIDATE_FIELDS:
            if name in sources:
                continue
            value = getattr(candidate, name)
            if _is_filled(value):
                setattr(merged, name, value)
                sources[name] = source

    return merged, sources


class ProductEnricher:
    """
    Extracts product metadata from arbitrary shop pages.

    Stateless between calls: every call parses its own document and
    builds its own candidates, so one instance can serve many threads.

    Usage:
        enricher = ProductEnricher()
        record = enricher.enrich("https://shop.example/p/123")
        if record.ok:
            print(record.title, record.price, record.currency)
    """

    def __init__(self, fetcher: PageFetcher | None = None, strategies=EXTRACTION_STRATEGIES):
        self.fetcher = fetcher or PageFetcher()
        self.strategies = strategies

    def enrich(self, url: str) -> ProductRecord:
        """
        Fetch and extract a product page. Never raises.

        Args:
            url: Product page URL as submitted by the user

        Returns:
            ProductRecord with status ok, or failed with an error reason
        """
        domain = get_domain(url) or UNKNOWN_DOMAIN

        try:
            if not is_valid_url(url):
                raise InvalidUrlError(url)

            page = self.fetcher.fetch(url.strip())
            return self.extract_from_html(url, page.text)

        except EnrichmentError as e:
            logger.info("Enrichment failed for %s: %s", url, e.reason)
            return self._failed(url, domain, e.reason)
        except Exception as e:
            logger.exception("Unexpected enrichment error for %s", url)
            return self._failed(url, domain, f"{type(e).__name__}: {str(e)[:100]}")

    def extract_from_html(self, url: str, html: str) -> ProductRecord:
        """
        Extract a ProductRecord from already-fetched HTML.

        Args:
            url: Source page URL (base for relative links)
            html: Page body

        Returns:
            ProductRecord; failed with "no product data found" when no
            strategy produced a title, image or price
        """
        domain = get_domain(url) or UNKNOWN_DOMAIN
        soup = BeautifulSoup(html or "", "lxml")

        candidates = self._run_strategies(soup, url)
        merged, sources = merge_candidates(candidates)

        image_url = resolve_url(merged.image_url, url) if merged.image_url else ""
        if not image_url:
            sources.pop("image_url", None)

        found = bool(merged.title or image_url or merged.price is not None)
        if not found:
            reason = NoProductDataError().reason
            logger.info("No product data on %s", url)
            return ProductRecord(
                source_url=url,
                domain=domain,
                status=EnrichStatus.FAILED,
                title=domain,
                currency=merged.currency,
                error_reason=reason,
                extraction_method=sources,
            )

        logger.info("Enriched %s: title=%s price=%s %s (sources: %s)",
                    url, (merged.title or "")[:50], merged.price, merged.currency or "", sources)

        return ProductRecord(
            source_url=url,
            domain=domain,
            status=EnrichStatus.OK,
            title=merged.title or domain,
            image_url=image_url or None,
            price=merged.price,
            currency=merged.currency,
            extraction_method=sources,
        )

    def _run_strategies(self, soup: BeautifulSoup, url: str) -> List[Tuple[str, ExtractionCandidate]]:
        """Run every strategy in priority order."""
        results = []
        for name, strategy in self.strategies:
            candidate = strategy(soup, url)
            logger.debug("Strategy %s -> %s", name, candidate)
            results.append((name, candidate))
        return results

    @staticmethod
    def _failed(url: str, domain: str, reason: str) -> ProductRecord:
        return ProductRecord(
            source_url=url,
            domain=domain,
            status=EnrichStatus.FAILED,
            error_reason=reason,
        )
