"""
Enrichment service surface.

Modules:
    enrichment_service - EnrichmentService and fire-and-forget EnrichmentDispatcher
    server - Internal HTTP trigger guarded by a shared secret
"""

from .enrichment_service import EnrichmentDispatcher, EnrichmentService
from .server import ENRICH_PATH, EnrichRequestHandler, EnrichServer, create_server

__all__ = [
    'EnrichmentService',
    'EnrichmentDispatcher',
    'EnrichServer',
    'EnrichRequestHandler',
    'create_server',
    'ENRICH_PATH',
]
