"""
Enrich Trigger Server

Internal HTTP endpoint the create/refresh handlers call fire-and-forget:

    POST /api/items/enrich
    x-enrich-secret: <shared secret>
    {"uid": "...", "itemId": "...", "url": "..."}

Service-to-service only; authenticated by the shared secret, not by
user identity.
"""

from __future__ import annotations

import http.server
import json
import logging
import secrets

from ..common.constants import ENRICH_SECRET_HEADER
from .enrichment_service import EnrichmentService

logger = logging.getLogger(__name__)

ENRICH_PATH = "/api/items/enrich"


class EnrichRequestHandler(http.server.BaseHTTPRequestHandler):
    """Handle enrich trigger requests."""

    server: "EnrichServer"

    def do_POST(self):
        """Handle POST request (enrich trigger)."""
        # Body must be consumed before any reply
        try:
            length = int(self.headers.get('Content-Length') or 0)
        except ValueError:
            length = 0
        raw = self.rfile.read(length) if length > 0 else b""

        if self.path.split('?', 1)[0] != ENRICH_PATH:
            self._send_json(404, {"ok": False, "error": "Not found"})
            return

        if not self._authorized():
            self._send_json(403, {"ok": False, "error": "Forbidden"})
            return

        try:
            body = json.loads(raw or b"null")
        except (ValueError, UnicodeDecodeError):
            self._send_json(400, {"ok": False, "error": "Invalid JSON in body"})
            return

        if not isinstance(body, dict):
            body = {}

        uid = str(body.get('uid') or '').strip()
        item_id = str(body.get('itemId') or '').strip()
        url = str(body.get('url') or '').strip()

        if not uid or not item_id or not url:
            self._send_json(400, {"ok": False, "error": "Missing uid/itemId/url"})
            return

        try:
            record = self.server.service.enrich_item(uid, item_id, url)
        except Exception as e:
            logger.exception("Enrich request failed for %s/%s", uid, item_id)
            self._send_json(500, {"ok": False, "error": str(e) or "Server error"})
            return

        self._send_json(200, {
            "ok": record.ok,
            "title": record.title,
            "image_url": record.image_url,
            "price": record.price,
            "currency": record.currency,
            "error": record.error_reason,
        })

    def _authorized(self) -> bool:
        expected = self.server.enrich_secret
        received = self.headers.get(ENRICH_SECRET_HEADER) or ""
        # Unset secret refuses everything
        if not expected:
            return False
        return secrets.compare_digest(received.encode(), expected.encode())

    def _send_json(self, status: int, payload: dict) -> None:
        data = json.dumps(payload).encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format, *args):
        """Route access logging through the module logger."""
        logger.debug("%s - %s", self.address_string(), format % args)


class EnrichServer(http.server.ThreadingHTTPServer):
    """Threading HTTP server carrying the service and shared secret."""

    daemon_threads = True

    def __init__(self, address, service: EnrichmentService, enrich_secret: str):
        super().__init__(address, EnrichRequestHandler)
        self.service = service
        self.enrich_secret = enrich_secret


def create_server(
    service: EnrichmentService,
    secret: str,
    host: str = "127.0.0.1",
    port: int = 8787,
) -> EnrichServer:
    """
    Build the trigger server (not yet serving).

    Args:
        service: Service that runs and stores enrichments
        secret: Expected x-enrich-secret value
        host: Bind address
        port: Bind port (0 picks a free port)

    Returns:
        EnrichServer; call serve_forever() to start
    """
    if not secret:
        logger.warning("ENRICH_SECRET is not set; every enrich request will be refused")
    return EnrichServer((host, port), service, secret)
