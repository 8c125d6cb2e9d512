"""
Structured Data Parser

Extracts product information from JSON-LD structured data (schema.org).
This is the highest priority source for product data as it's explicitly
structured by the website for search engines.

Real-world sites nest the actual Product node inside @graph wrappers,
WebPage.mainEntity, ItemList elements, ProductGroup variants and so on,
so every block is flattened into a list of nodes before filtering by type.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from ...common.text_utils import clean_text
from ...models import ExtractionCandidate
from ..normalize import extract_currency_loose, normalize_amount

logger = logging.getLogger(__name__)


class StructuredDataParser:
    """
    Parses JSON-LD structured data from HTML pages.

    JSON-LD is embedded in <script type="application/ld+json"> tags and
    contains schema.org structured data for products, offers, etc.

    Usage:
        parser = StructuredDataParser()
        blocks = parser.parse(soup)
        candidate = parser.extract(soup)
    """

    PRODUCT_TYPE = 'product'
    AGGREGATE_OFFER_TYPE = 'aggregateoffer'

    # Properties that can hold further nodes worth visiting
    CONTAINER_KEYS = (
        '@graph',
        'mainEntity',
        'itemListElement',
        'offers',
        'hasVariant',
        'isVariantOf',
    )

    MAX_DEPTH = 32

    def parse(self, soup: BeautifulSoup) -> List[Any]:
        """
        Extract every JSON-LD block from the page.

        Blocks that are not valid JSON are skipped.

        Args:
            soup: BeautifulSoup object of the page

        Returns:
            List of parsed JSON values, in document order
        """
        blocks = []

        for script in soup.find_all('script', type='application/ld+json'):
            raw = script.string or script.get_text()
            if not raw or not raw.strip():
                continue
            try:
                blocks.append(json.loads(raw))
            except (ValueError, RecursionError) as e:
                logger.debug("Skipping malformed JSON-LD block: %s", e)
                continue

        return blocks

    def flatten(self, value: Any, depth: int = 0) -> List[Dict[str, Any]]:
        """
        Flatten a JSON-LD value into a list of object nodes.

        Args:
            value: Parsed JSON-LD (object, array, or scalar)
            depth: Current recursion depth

        Returns:
            Object nodes in document order, parents before children
        """
        if depth > self.MAX_DEPTH:
            return []

        nodes = []

        if isinstance(value, list):
            for item in value:
                nodes.extend(self.flatten(item, depth + 1))
        elif isinstance(value, dict):
            nodes.append(value)
            for key in self.CONTAINER_KEYS:
                if key in value:
                    nodes.extend(self.flatten(value[key], depth + 1))

        return nodes

    def is_product(self, node: Dict[str, Any]) -> bool:
        """Check if a node's @type (string or list) is Product."""
        return self._has_type(node, self.PRODUCT_TYPE)

    def find_candidates(self, blocks: List[Any]) -> List[Dict[str, Any]]:
        """
        Flatten all blocks and keep Product nodes.

        Some sites omit or mistype @type, so when no node is a Product
        every flattened node is returned instead.
        """
        nodes = []
        for block in blocks:
            nodes.extend(self.flatten(block))

        products = [node for node in nodes if self.is_product(node)]
        return products or nodes

    def extract(self, soup: BeautifulSoup) -> ExtractionCandidate:
        """
        Extract the best title/image/price/currency from JSON-LD.

        Scans candidate nodes in document order; the first node that
        supplies a field wins it. Stops as soon as title, image and a
        price or currency are known.

        Args:
            soup: BeautifulSoup object of the page

        Returns:
            ExtractionCandidate (fields may be None)
        """
        candidate = ExtractionCandidate()

        for node in self.find_candidates(self.parse(soup)):
            if candidate.title is None:
                candidate.title = self.extract_title(node)

            if candidate.image_url is None:
                candidate.image_url = self.extract_image(node)

            if candidate.price is None or candidate.currency is None:
                price, currency = self.extract_price(node)
                if candidate.price is None:
                    candidate.price = price
                if candidate.currency is None:
                    candidate.currency = currency

            if candidate.is_complete():
                break

        return candidate

    def extract_title(self, node: Dict[str, Any]) -> Optional[str]:
        """
        Extract product name from a node.

        Args:
            node: JSON-LD object node

        Returns:
            Cleaned name or None
        """
        name = node.get('name')
        if not isinstance(name, str):
            return None
        return clean_text(name) or None

    def extract_image(self, node: Dict[str, Any]) -> Optional[str]:
        """
        Extract main image URL from a node.

        Handles a plain string, a list (first usable entry), and
        ImageObject nodes with url/contentUrl.

        Args:
            node: JSON-LD object node

        Returns:
            Image URL as written on the page (may be relative) or None
        """
        image = node.get('image')
        if isinstance(image, list):
            for entry in image:
                url = self._image_url(entry)
                if url:
                    return url
            return None
        return self._image_url(image)

    def extract_price(self, node: Dict[str, Any]):
        """
        Extract price and currency from a node's offers.

        AggregateOffer prefers lowPrice, then highPrice. Currency comes
        from priceCurrency, else is guessed from the raw price text.

        Args:
            node: JSON-LD object node

        Returns:
            Tuple of (price or None, currency or None)
        """
        offer = node.get('offers')
        if isinstance(offer, list):
            offer = offer[0] if offer else None
        if not isinstance(offer, dict):
            return None, None

        if self._has_type(offer, self.AGGREGATE_OFFER_TYPE):
            keys = ('lowPrice', 'highPrice', 'price')
        else:
            keys = ('price', 'lowPrice', 'highPrice')

        raw_price = None
        for key in keys:
            if offer.get(key) not in (None, ''):
                raw_price = offer[key]
                break

        price = normalize_amount(raw_price) if isinstance(raw_price, (str, int, float)) else None

        currency = offer.get('priceCurrency')
        if isinstance(currency, str) and currency.strip():
            currency = currency.strip().upper()
        else:
            currency = extract_currency_loose(raw_price) if isinstance(raw_price, str) else None

        return price, currency

    def has_data(self, candidate: ExtractionCandidate) -> bool:
        """
        Check if a candidate contains useful product information.

        Args:
            candidate: Result of extract()

        Returns:
            True if title, image, or price was found
        """
        return bool(candidate.title or candidate.image_url or candidate.price is not None)

    def _has_type(self, node: Dict[str, Any], type_name: str) -> bool:
        node_type = node.get('@type')
        if isinstance(node_type, str):
            return node_type.strip().lower() == type_name
        if isinstance(node_type, list):
            return any(
                isinstance(t, str) and t.strip().lower() == type_name
                for t in node_type
            )
        return False

    def _image_url(self, value: Any) -> Optional[str]:
        if isinstance(value, str):
            return clean_text(value) or None
        if isinstance(value, dict):
            for key in ('url', 'contentUrl'):
                url = value.get(key)
                if isinstance(url, str) and url.strip():
                    return url.strip()
        return None


def extract_from_jsonld(soup: BeautifulSoup) -> ExtractionCandidate:
    """Extract a candidate from all JSON-LD blocks of a parsed page."""
    return StructuredDataParser().extract(soup)
