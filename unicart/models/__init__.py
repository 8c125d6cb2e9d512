"""
Data models for product enrichment.

This module contains pure data classes with no business logic.
"""

from .product import EnrichStatus, ExtractionCandidate, ProductRecord

__all__ = ['EnrichStatus', 'ExtractionCandidate', 'ProductRecord']
