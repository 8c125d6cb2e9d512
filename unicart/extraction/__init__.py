"""
Product metadata extraction.

Modules:
    normalize - Loose amount and currency parsing
    errors - Failure taxonomy (invalid url, fetch failed, no product data)
    fetcher - PageFetcher for outbound page requests
    enricher - ProductEnricher merging all extraction strategies
    parsers - Specialized parsers for different data sources
"""

from .enricher import EXTRACTION_STRATEGIES, ProductEnricher, merge_candidates
from .errors import (
    EnrichmentError,
    FetchFailedError,
    InvalidUrlError,
    NoProductDataError,
)
from .fetcher import FetchResult, PageFetcher
from .normalize import extract_currency_loose, normalize_amount
from .parsers import (
    HTMLSignalParser,
    StructuredDataParser,
    extract_from_html_signals,
    extract_from_jsonld,
)

__all__ = [
    # Orchestration
    'ProductEnricher',
    'EXTRACTION_STRATEGIES',
    'merge_candidates',
    # Fetching
    'PageFetcher',
    'FetchResult',
    # Normalization
    'normalize_amount',
    'extract_currency_loose',
    # Errors
    'EnrichmentError',
    'InvalidUrlError',
    'FetchFailedError',
    'NoProductDataError',
    # Parsers
    'StructuredDataParser',
    'HTMLSignalParser',
    'extract_from_jsonld',
    'extract_from_html_signals',
]
