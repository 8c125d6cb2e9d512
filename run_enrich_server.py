#!/usr/bin/env python3
"""
Enrich Trigger Server

Serves the internal POST /api/items/enrich endpoint.
ENRICH_SECRET is read from the environment or a .env file.

Usage:
    python3 run_enrich_server.py
    python3 run_enrich_server.py --port 9000 --store data/items.json --verbose
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from unicart.common import (
    get_enrich_secret,
    load_enrichment_settings,
    load_server_settings,
    load_storage_settings,
    setup_logging,
)
from unicart.extraction import PageFetcher, ProductEnricher
from unicart.service import EnrichmentService, create_server
from unicart.storage import ItemStore

load_dotenv(Path(__file__).parent / ".env")

logger = logging.getLogger("unicart.run_enrich_server")


def main():
    parser = argparse.ArgumentParser(description="Serve the internal product enrichment trigger")
    parser.add_argument("--host", help="Bind address (default from config)")
    parser.add_argument("--port", type=int, help="Bind port (default from config)")
    parser.add_argument("--store", help="Wishlist item JSON file (default from config)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Warnings only")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    settings = load_enrichment_settings()
    server_settings = load_server_settings(settings)
    storage_settings = load_storage_settings(settings)

    secret = get_enrich_secret()
    if not secret:
        logger.error("ENRICH_SECRET is not set; refusing to start")
        sys.exit(1)

    host = args.host or server_settings.get("host", "127.0.0.1")
    port = args.port or server_settings.get("port", 8787)
    store_path = args.store or storage_settings.get("path", "data/wishlist_items.json")

    fetcher = PageFetcher()
    service = EnrichmentService(ProductEnricher(fetcher), ItemStore(store_path))
    server = create_server(service, secret, host=host, port=port)

    logger.info("Serving enrich trigger on http://%s:%d (store: %s)", host, port, store_path)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
        fetcher.close()


if __name__ == "__main__":
    main()
