"""Tests for unicart/storage/item_store.py"""

import json

import pytest

from unicart.storage.item_store import DELETE_FIELD, ItemStore


@pytest.fixture
def store(tmp_path):
    return ItemStore(str(tmp_path / "data" / "items.json"))


class TestUpsert:
    def test_creates_file_and_item(self, store):
        store.upsert("u1", "i1", {"title": "shop.example", "enrichStatus": "pending"})

        with open(store.path, encoding="utf-8") as f:
            data = json.load(f)
        assert data == {"u1": {"i1": {"title": "shop.example", "enrichStatus": "pending"}}}

    def test_merges_existing_fields(self, store):
        store.upsert("u1", "i1", {"title": "Old", "status": "todo"})
        item = store.upsert("u1", "i1", {"title": "New"})
        assert item == {"title": "New", "status": "todo"}

    def test_delete_field(self, store):
        store.upsert("u1", "i1", {"enrichError": "HTTP 500", "title": "T"})
        item = store.upsert("u1", "i1", {"enrichError": DELETE_FIELD})
        assert item == {"title": "T"}

    def test_users_are_isolated(self, store):
        store.upsert("u1", "i1", {"title": "A"})
        store.upsert("u2", "i1", {"title": "B"})
        assert store.get("u1", "i1") == {"title": "A"}
        assert store.get("u2", "i1") == {"title": "B"}

    def test_get_missing(self, store):
        assert store.get("nobody", "nothing") is None


class TestRecordEnrichment:
    def test_ok_record(self, store, ok_record):
        store.upsert("u1", "i1", {"enrichStatus": "pending", "enrichError": "HTTP 403", "status": "todo"})
        item = store.record_enrichment("u1", "i1", ok_record)

        assert item["title"] == "Retro Sneaker Wit"
        assert item["image_url"] == "https://cdn.shop.example/sneaker-1.jpg"
        assert item["price"] == 89.95
        assert item["currency"] == "EUR"
        assert item["shop"] == "shop.example"
        assert item["domain"] == "shop.example"
        assert item["enrichStatus"] == "ok"
        assert "enrichError" not in item
        assert item["enrichedAt"] == item["updatedAt"]
        assert item["status"] == "todo"

    def test_ok_record_without_price_keeps_client_price(self, store, ok_record):
        ok_record.price = None
        store.upsert("u1", "i1", {"price": 30.0})
        item = store.record_enrichment("u1", "i1", ok_record)
        assert item["price"] == 30.0

    def test_failed_record_keeps_product_fields(self, store, failed_record):
        store.upsert("u1", "i1", {"title": "Client Title", "price": 10.0})
        item = store.record_enrichment("u1", "i1", failed_record)

        assert item["title"] == "Client Title"
        assert item["price"] == 10.0
        assert item["enrichStatus"] == "failed"
        assert item["enrichError"] == "HTTP 403"
        assert "enrichedAt" in item

    def test_out_of_order_results_last_write_wins(self, store, ok_record, failed_record):
        store.record_enrichment("u1", "i1", ok_record)
        store.record_enrichment("u1", "i1", failed_record)
        item = store.get("u1", "i1")
        assert item["enrichStatus"] == "failed"
        assert item["title"] == "Retro Sneaker Wit"


class TestMarkPending:
    def test_sets_pending_and_clears_error(self, store):
        store.upsert("u1", "i1", {"enrichStatus": "failed", "enrichError": "HTTP 404"})
        item = store.mark_pending("u1", "i1")

        assert item["enrichStatus"] == "pending"
        assert "enrichError" not in item
        assert "updatedAt" in item
