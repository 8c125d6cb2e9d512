"""
HTML Signal Parser

Extracts fallback product signals from HTML elements:
- Title from Open Graph / Twitter Card meta, h1, or <title>
- Image from Open Graph / Twitter Card meta or product-looking <img> tags
- Price text from product/OG meta, itemprop="price", or price-classed elements
- Currency from price-currency meta, itemprop="priceCurrency", or the price text

This parser is used when structured data (JSON-LD) is absent or incomplete.
"""

from typing import Optional

from bs4 import BeautifulSoup

from ...common.text_utils import clean_text, resolve_url
from ...models import ExtractionCandidate
from ..normalize import extract_currency_loose, normalize_amount


class HTMLSignalParser:
    """
    Parses product signals from meta tags and HTML elements.

    Usage:
        parser = HTMLSignalParser(soup, page_url)
        title = parser.extract_title()
        image = parser.extract_image()
        candidate = parser.extract()
    """

    TITLE_META = ('og:title', 'twitter:title')
    IMAGE_META = ('og:image', 'og:image:url', 'og:image:secure_url', 'twitter:image', 'twitter:image:src')
    PRICE_META = ('product:price:amount', 'og:price:amount', 'twitter:data1')
    CURRENCY_META = ('product:price:currency', 'og:price:currency')

    PRODUCT_IMAGE_SELECTORS = ['img[itemprop="image"]', '[itemprop="image"]', 'img[data-testid*="image"]']
    PRICE_HINT_SELECTORS = ['[class*="price"]', '[data-testid*="price"]']

    def __init__(self, soup: BeautifulSoup, page_url: str):
        """
        Initialize the HTML parser.

        Args:
            soup: BeautifulSoup object of the page
            page_url: URL the page was fetched from (base for relative links)
        """
        self.soup = soup
        self.page_url = page_url

    def extract(self) -> ExtractionCandidate:
        """
        Extract all signals into one candidate.

        Returns:
            ExtractionCandidate with the image already absolute
        """
        price_text = self.extract_price_text()

        return ExtractionCandidate(
            title=self.extract_title() or None,
            image_url=self.extract_image() or None,
            price=normalize_amount(price_text) if price_text else None,
            currency=self.extract_currency(price_text) or None,
        )

    def extract_title(self) -> str:
        """
        Extract product title.

        Tries OG title, Twitter title, first h1, then the document title.

        Returns:
            Product title or empty string
        """
        title = self._meta(*self.TITLE_META)
        if title:
            return title

        for tag in ('h1', 'title'):
            element = self.soup.find(tag)
            if element:
                text = clean_text(element.get_text())
                if text:
                    return text

        return ""

    def extract_image(self) -> str:
        """
        Extract main product image as an absolute URL.

        Returns:
            Absolute image URL or empty string if none or unresolvable
        """
        return resolve_url(self.extract_raw_image(), self.page_url)

    def extract_raw_image(self) -> str:
        """
        Extract the main product image URL as written on the page.

        Tries OG/Twitter image meta, images marked as the product image,
        then the first image on the page.

        Returns:
            Image URL (possibly relative) or empty string
        """
        image = self._meta(*self.IMAGE_META)
        if image:
            return image

        for selector in self.PRODUCT_IMAGE_SELECTORS:
            for element in self.soup.select(selector):
                src = self._image_source(element)
                if src:
                    return src

        for element in self.soup.find_all('img'):
            src = self._image_source(element)
            if src:
                return src

        return ""

    def extract_price_text(self) -> str:
        """
        Extract raw price text.

        Returns:
            Price text as found (e.g., "1.299,00 €") or empty string
        """
        price = self._meta(*self.PRICE_META)
        if price:
            return price

        element = self.soup.select_one('[itemprop="price"]')
        if element:
            text = clean_text(element.get('content')) or clean_text(element.get_text())
            if text:
                return text

        for selector in self.PRICE_HINT_SELECTORS:
            for element in self.soup.select(selector):
                # <meta>/<link> carry no text
                if element.name in ('meta', 'link', 'script', 'style'):
                    continue
                text = clean_text(element.get_text())
                if text:
                    return text

        return ""

    def extract_currency(self, price_text: Optional[str] = None) -> str:
        """
        Extract currency code.

        Args:
            price_text: Raw price text to guess from as a last resort
                (if None, extracted from the page)

        Returns:
            Currency code (e.g., "EUR") or empty string
        """
        currency = self._meta(*self.CURRENCY_META)
        if currency:
            return currency.upper()

        element = self.soup.select_one('[itemprop="priceCurrency"]')
        if element:
            text = clean_text(element.get('content')) or clean_text(element.get_text())
            if text:
                return text.upper()

        if price_text is None:
            price_text = self.extract_price_text()

        return extract_currency_loose(price_text) or ""

    def _meta(self, *keys: str) -> str:
        """Return the first non-empty content of meta[property|name=key]."""
        for key in keys:
            for attr in ('property', 'name'):
                element = self.soup.find('meta', attrs={attr: key})
                if element:
                    content = clean_text(element.get('content'))
                    if content:
                        return content
        return ""

    def _image_source(self, element) -> str:
        for attr in ('src', 'content', 'data-src', 'href'):
            value = clean_text(element.get(attr))
            if value:
                return value
        return ""


def extract_from_html_signals(soup: BeautifulSoup, page_url: str) -> ExtractionCandidate:
    """Extract a candidate from meta tags and HTML heuristics of a parsed page."""
    return HTMLSignalParser(soup, page_url).extract()
