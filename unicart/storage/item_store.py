"""
Wishlist Item Store

Per-user wishlist items kept in a single JSON document:

    {uid: {item_id: {field: value, ...}}}

Writes are merge-style upserts keyed by item id, so enrichment results
can land in any order.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from datetime import datetime, timezone

from ..common.constants import (
    FIELD_ENRICH_ERROR,
    FIELD_ENRICH_STATUS,
    FIELD_ENRICHED_AT,
    FIELD_UPDATED_AT,
)
from ..models import EnrichStatus, ProductRecord

logger = logging.getLogger(__name__)


class _DeleteField:
    """Sentinel: remove the field on upsert."""

    def __repr__(self):
        return "DELETE_FIELD"


DELETE_FIELD = _DeleteField()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ItemStore:
    """
    JSON-file backed store for wishlist items.

    Usage:
        store = ItemStore("data/wishlist_items.json")
        store.record_enrichment(uid, item_id, record)
        item = store.get(uid, item_id)
    """

    def __init__(self, path: str):
        """
        Initialize the store.

        Args:
            path: JSON file location (created on first write)
        """
        self.path = path
        self._lock = threading.Lock()

    def _load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _save(self, data: dict) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.path)

    def get(self, uid: str, item_id: str) -> dict | None:
        """Return a copy of the stored item, or None."""
        with self._lock:
            item = self._load().get(uid, {}).get(item_id)
        return dict(item) if item is not None else None

    def upsert(self, uid: str, item_id: str, fields: dict) -> dict:
        """
        Merge fields into an item, creating it if needed.

        Args:
            uid: Owner user id
            item_id: Wishlist item id
            fields: Values to set; DELETE_FIELD removes a field

        Returns:
            The item after the merge
        """
        with self._lock:
            data = self._load()
            item = data.setdefault(uid, {}).setdefault(item_id, {})

            for key, value in fields.items():
                if value is DELETE_FIELD:
                    item.pop(key, None)
                else:
                    item[key] = value

            self._save(data)
            return dict(item)

    def record_enrichment(self, uid: str, item_id: str, record: ProductRecord) -> dict:
        """
        Write an enrichment result onto a wishlist item.

        Successful results overwrite product fields and clear any earlier
        error. Failed results only update status, error and domain, so data
        from an earlier success or from the client is kept.

        Args:
            uid: Owner user id
            item_id: Wishlist item id
            record: Result of ProductEnricher.enrich()

        Returns:
            The item after the merge
        """
        now = _now()

        if record.ok:
            fields = {
                "title": record.title,
                "image_url": record.image_url or "",
                "shop": record.domain,
                "domain": record.domain,
                FIELD_ENRICH_STATUS: EnrichStatus.OK.value,
                FIELD_ENRICH_ERROR: DELETE_FIELD,
                FIELD_ENRICHED_AT: now,
                FIELD_UPDATED_AT: now,
            }
            if record.price is not None:
                fields["price"] = record.price
            if record.currency:
                fields["currency"] = record.currency
        else:
            fields = {
                "domain": record.domain,
                FIELD_ENRICH_STATUS: EnrichStatus.FAILED.value,
                FIELD_ENRICH_ERROR: record.error_reason,
                FIELD_ENRICHED_AT: now,
            }

        logger.debug("Recording %s enrichment for %s/%s", record.status.value, uid, item_id)
        return self.upsert(uid, item_id, fields)

    def mark_pending(self, uid: str, item_id: str) -> dict:
        """
        Flag an item for re-enrichment.

        Args:
            uid: Owner user id
            item_id: Wishlist item id

        Returns:
            The item after the merge
        """
        return self.upsert(uid, item_id, {
            FIELD_ENRICH_STATUS: EnrichStatus.PENDING.value,
            FIELD_ENRICH_ERROR: DELETE_FIELD,
            FIELD_UPDATED_AT: _now(),
        })
