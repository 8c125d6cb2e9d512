"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

# Loose currency detection, checked in this order; first match wins.
# Markers are compared against upper-cased text.
CURRENCY_MARKERS = (
    ("EUR", ("EUR", "€")),
    ("USD", ("USD", "$")),
    ("GBP", ("GBP", "£")),
)

# Wishlist item fields written by enrichment
FIELD_ENRICH_STATUS = "enrichStatus"
FIELD_ENRICH_ERROR = "enrichError"
FIELD_ENRICHED_AT = "enrichedAt"
FIELD_UPDATED_AT = "updatedAt"

# Header carrying the shared secret for the internal enrich trigger
ENRICH_SECRET_HEADER = "x-enrich-secret"
ENRICH_SECRET_ENV = "ENRICH_SECRET"
