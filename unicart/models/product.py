"""
Product data models.

Pure data classes for representing enrichment results.
No business logic - only data structure definitions.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class EnrichStatus(str, Enum):
    """Enrichment state stored on a wishlist item."""
    OK = "ok"
    FAILED = "failed"
    PENDING = "pending"


@dataclass
class ExtractionCandidate:
    """
    Partial product record produced by one signal source.

    A field is only set when its source text was non-empty and, for
    price, numerically parseable.
    """
    title: Optional[str] = None
    image_url: Optional[str] = None     # May still be relative to the page
    price: Optional[float] = None
    currency: Optional[str] = None      # "EUR", "USD", ...

    def __post_init__(self):
        if self.price is not None and (not math.isfinite(self.price) or self.price < 0):
            raise ValueError(f"Invalid candidate price: {self.price!r}")

    def is_complete(self) -> bool:
        """Title, image and a price or currency are all known."""
        return bool(
            self.title and
            self.image_url and
            (self.price is not None or self.currency)
        )

    def is_empty(self) -> bool:
        return not (self.title or self.image_url or self.price is not None or self.currency)


@dataclass
class ProductRecord:
    """
    Final result of one enrichment call.

    Every product field holds the single winning value (or None).
    `domain` is always populated; `error_reason` only on failure.
    """

    source_url: str
    domain: str
    status: EnrichStatus
    title: Optional[str] = None
    image_url: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    error_reason: Optional[str] = None

    # Tracks which extraction source provided each field
    extraction_method: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate status/error consistency after initialization."""
        self.status = EnrichStatus(self.status)
        if not self.domain:
            raise ValueError("Record domain is required")
        if self.status == EnrichStatus.FAILED and not self.error_reason:
            raise ValueError("Failed record requires an error reason")
        if self.status != EnrichStatus.FAILED and self.error_reason:
            raise ValueError("Only failed records carry an error reason")

    @property
    def ok(self) -> bool:
        return self.status == EnrichStatus.OK
