"""
Specialized parsers for product signal extraction.

Each parser handles a specific data source:
- StructuredDataParser: JSON-LD structured data (schema.org)
- HTMLSignalParser: Open Graph / Twitter Card meta and HTML heuristics
"""

from .html_parser import HTMLSignalParser, extract_from_html_signals
from .structured_data import StructuredDataParser, extract_from_jsonld

__all__ = [
    'StructuredDataParser',
    'HTMLSignalParser',
    'extract_from_jsonld',
    'extract_from_html_signals',
]
