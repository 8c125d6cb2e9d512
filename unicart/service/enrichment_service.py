"""
Enrichment Service

Runs one enrichment for a wishlist item and persists the result, either
in the caller's thread or fire-and-forget on a worker pool.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from ..common.config_loader import load_server_settings
from ..extraction import ProductEnricher
from ..models import ProductRecord
from ..storage import ItemStore

logger = logging.getLogger(__name__)


class EnrichmentService:
    """Enriches a wishlist item and writes the outcome to the store."""

    def __init__(self, enricher: ProductEnricher, store: ItemStore):
        self.enricher = enricher
        self.store = store

    def enrich_item(self, uid: str, item_id: str, url: str) -> ProductRecord:
        """
        Enrich one item.

        Args:
            uid: Owner user id
            item_id: Wishlist item id
            url: Product page URL

        Returns:
            The ProductRecord that was stored

        Raises:
            OSError: If the store cannot be written
        """
        record = self.enricher.enrich(url)
        self.store.record_enrichment(uid, item_id, record)

        logger.info("[%s/%s] enrichStatus=%s%s", uid, item_id, record.status.value,
                    f" ({record.error_reason})" if record.error_reason else "")
        return record


class EnrichmentDispatcher:
    """
    Schedules enrichments in the background.

    submit() returns immediately and hands nothing back; the outcome is
    only visible through the store. A failing job is logged and never
    affects other jobs.

    Usage:
        with EnrichmentDispatcher(service, max_workers=8) as dispatcher:
            dispatcher.submit(uid, item_id, url)
    """

    def __init__(self, service: EnrichmentService, max_workers: int | None = None):
        if max_workers is None:
            max_workers = load_server_settings().get("max_workers", 8)
        self.service = service
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="enrich")

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.shutdown()

    def submit(self, uid: str, item_id: str, url: str) -> None:
        """Queue an enrichment without waiting for it."""
        self._executor.submit(self._run, uid, item_id, url)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _run(self, uid: str, item_id: str, url: str) -> None:
        try:
            self.service.enrich_item(uid, item_id, url)
        except Exception:
            logger.exception("Background enrichment failed for %s/%s", uid, item_id)
