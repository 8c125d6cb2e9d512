"""Tests for unicart/extraction/parsers/structured_data.py"""

import json

import pytest
from bs4 import BeautifulSoup

from unicart.extraction.parsers.structured_data import StructuredDataParser, extract_from_jsonld


def make_soup_with_jsonld(*blocks: str) -> BeautifulSoup:
    """Create a BeautifulSoup with one JSON-LD script tag per block."""
    scripts = "".join(f'<script type="application/ld+json">{b}</script>' for b in blocks)
    html = f'<html><head>{scripts}</head><body></body></html>'
    return BeautifulSoup(html, "lxml")


@pytest.fixture
def parser():
    return StructuredDataParser()


class TestParse:
    def test_parses_every_block(self, parser):
        soup = make_soup_with_jsonld('{"@type": "Organization"}', '{"@type": "Product"}')
        assert [b["@type"] for b in parser.parse(soup)] == ["Organization", "Product"]

    def test_skips_invalid_json(self, parser):
        soup = make_soup_with_jsonld("not valid json{{{", '{"@type": "Product", "name": "Ok"}')
        blocks = parser.parse(soup)
        assert len(blocks) == 1
        assert blocks[0]["name"] == "Ok"

    def test_skips_too_deeply_nested_block(self, parser):
        soup = make_soup_with_jsonld("[" * 100000, '{"@type": "Product", "name": "Ok"}')
        blocks = parser.parse(soup)
        assert blocks == [{"@type": "Product", "name": "Ok"}]

    def test_no_script(self, parser):
        soup = BeautifulSoup("<html><body></body></html>", "lxml")
        assert parser.parse(soup) == []

    def test_top_level_array(self, parser):
        soup = make_soup_with_jsonld('[{"@type": "BreadcrumbList"}, {"@type": "Product"}]')
        assert isinstance(parser.parse(soup)[0], list)


class TestFlatten:
    def test_graph_and_main_entity(self, parser):
        block = {
            "@graph": [
                {"@type": "WebPage", "mainEntity": {"@type": "Product", "name": "Deep"}},
            ]
        }
        types = [n.get("@type") for n in parser.flatten(block)]
        assert types == [None, "WebPage", "Product"]

    def test_offers_and_variants(self, parser):
        block = {
            "@type": "ProductGroup",
            "hasVariant": [{"@type": "Product", "name": "Red", "offers": {"@type": "Offer", "price": 1}}],
            "isVariantOf": {"@type": "ProductGroup", "name": "Parent"},
        }
        types = [n.get("@type") for n in parser.flatten(block)]
        assert types == ["ProductGroup", "Product", "Offer", "ProductGroup"]

    def test_item_list_elements(self, parser):
        block = {"@type": "ItemList", "itemListElement": [{"@type": "Product", "name": "A"}]}
        assert [n["@type"] for n in parser.flatten(block)] == ["ItemList", "Product"]

    def test_scalars_ignored(self, parser):
        assert parser.flatten("just a string") == []
        assert parser.flatten([1, 2, None]) == []


class TestIsProduct:
    @pytest.mark.parametrize("node_type", ["Product", "product", " PRODUCT ", ["Thing", "Product"]])
    def test_product_types(self, parser, node_type):
        assert parser.is_product({"@type": node_type}) is True

    @pytest.mark.parametrize("node_type", ["ProductGroup", "Offer", None, ["Thing"], 5])
    def test_other_types(self, parser, node_type):
        assert parser.is_product({"@type": node_type}) is False


class TestExtractPrice:
    def test_single_offer(self, parser):
        price, currency = parser.extract_price({"offers": {"price": "7.71", "priceCurrency": "EUR"}})
        assert price == pytest.approx(7.71)
        assert currency == "EUR"

    def test_offers_array_takes_first(self, parser):
        node = {"offers": [{"price": "12.50"}, {"price": "10.00"}]}
        assert parser.extract_price(node)[0] == pytest.approx(12.5)

    def test_numeric_price(self, parser):
        assert parser.extract_price({"offers": {"price": 19}})[0] == 19.0

    def test_price_too_large_for_float(self, parser):
        node = json.loads('{"offers": {"price": ' + "9" * 400 + ', "priceCurrency": "EUR"}}')
        price, currency = parser.extract_price(node)
        assert price is None
        assert currency == "EUR"

    def test_aggregate_offer_prefers_low_price(self, parser):
        node = {"offers": {"@type": "AggregateOffer", "price": "99", "lowPrice": "10", "highPrice": "50"}}
        assert parser.extract_price(node)[0] == 10.0

    def test_aggregate_offer_high_price_fallback(self, parser):
        node = {"offers": {"@type": "AggregateOffer", "highPrice": "50"}}
        assert parser.extract_price(node)[0] == 50.0

    def test_plain_offer_low_price_fallback(self, parser):
        assert parser.extract_price({"offers": {"lowPrice": "3,50"}})[0] == pytest.approx(3.5)

    def test_currency_derived_from_price_text(self, parser):
        price, currency = parser.extract_price({"offers": {"price": "€ 1.299,00"}})
        assert price == pytest.approx(1299.0)
        assert currency == "EUR"

    def test_no_offers(self, parser):
        assert parser.extract_price({}) == (None, None)

    def test_empty_offers_list(self, parser):
        assert parser.extract_price({"offers": []}) == (None, None)


class TestExtractImage:
    def test_string(self, parser):
        assert parser.extract_image({"image": "/a.jpg"}) == "/a.jpg"

    def test_list_takes_first_string(self, parser):
        assert parser.extract_image({"image": [None, "/b.jpg", "/c.jpg"]}) == "/b.jpg"

    def test_image_object(self, parser):
        assert parser.extract_image({"image": {"@type": "ImageObject", "url": "/d.jpg"}}) == "/d.jpg"

    def test_missing(self, parser):
        assert parser.extract_image({}) is None


class TestExtract:
    def test_complete_product(self, jsonld_page_html):
        soup = BeautifulSoup(jsonld_page_html, "lxml")
        candidate = extract_from_jsonld(soup)
        assert candidate.title == "Retro Sneaker Wit"
        assert candidate.image_url == "https://cdn.shop.example/sneaker-1.jpg"
        assert candidate.price == pytest.approx(89.95)
        assert candidate.currency == "EUR"

    def test_nested_graph_product(self, graph_page_html):
        soup = BeautifulSoup(graph_page_html, "lxml")
        candidate = extract_from_jsonld(soup)
        assert candidate.title == "Desk Lamp"
        assert candidate.image_url == "/images/desk-lamp.jpg"
        assert candidate.price == pytest.approx(1234.5)
        assert candidate.currency == "EUR"

    def test_first_match_per_field_wins(self):
        first = {"@type": "Product", "name": "First", "offers": {"price": "5"}}
        second = {"@type": "Product", "name": "Second", "image": "/second.jpg",
                  "offers": {"price": "9", "priceCurrency": "USD"}}
        soup = make_soup_with_jsonld(json.dumps(first), json.dumps(second))
        candidate = extract_from_jsonld(soup)
        assert candidate.title == "First"
        assert candidate.image_url == "/second.jpg"
        assert candidate.price == 5.0
        assert candidate.currency == "USD"

    def test_stops_once_complete(self):
        first = {"@type": "Product", "name": "A", "image": "/a.jpg", "offers": {"price": "5"}}
        second = {"@type": "Product", "offers": {"price": "9", "priceCurrency": "GBP"}}
        soup = make_soup_with_jsonld(json.dumps([first, second]))
        candidate = extract_from_jsonld(soup)
        assert candidate.price == 5.0
        assert candidate.currency is None

    def test_untyped_nodes_used_when_no_product(self):
        soup = make_soup_with_jsonld('{"name": "Untyped Thing", "image": "/u.jpg"}')
        candidate = extract_from_jsonld(soup)
        assert candidate.title == "Untyped Thing"
        assert candidate.image_url == "/u.jpg"

    def test_products_preferred_over_other_nodes(self):
        soup = make_soup_with_jsonld(
            '{"@type": "Organization", "name": "Acme Corp", "image": "/logo.png"}',
            '{"@type": "Product", "name": "Anvil"}',
        )
        candidate = extract_from_jsonld(soup)
        assert candidate.title == "Anvil"
        assert candidate.image_url is None

    def test_no_jsonld(self):
        soup = BeautifulSoup("<html><body><h1>Nope</h1></body></html>", "lxml")
        assert extract_from_jsonld(soup).is_empty()

    def test_has_data(self, parser):
        soup = make_soup_with_jsonld('{"@type": "Product", "offers": {"price": "0"}}')
        assert parser.has_data(parser.extract(soup)) is True
