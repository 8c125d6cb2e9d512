"""
Enrichment errors.

Each error carries the human-readable reason that ends up in the
item's enrichError field.
"""

from typing import Optional


class EnrichmentError(Exception):
    """Base class for failures that resolve to a failed ProductRecord."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class InvalidUrlError(EnrichmentError):
    """Source URL is not an absolute http(s) URL."""

    def __init__(self, url: str = ""):
        super().__init__("invalid url")
        self.url = url


class FetchFailedError(EnrichmentError):
    """Non-2xx response or transport error."""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        super().__init__(reason)
        self.status_code = status_code


class NoProductDataError(EnrichmentError):
    """Page fetched fine but carried no usable product signal."""

    def __init__(self):
        super().__init__("no product data found")
