"""
Wishlist Product Enrichment

Modules:
    models      - Data models (ExtractionCandidate, ProductRecord, EnrichStatus)
    common      - Shared utilities (config loader, logging, text/URL helpers)
    extraction  - Page fetching and product metadata extraction
    storage     - Per-user wishlist item store
    service     - Enrichment service, background dispatcher, HTTP trigger
"""
