# Common utilities
from .config_loader import (
    get_enrich_secret,
    load_config,
    load_enrichment_settings,
    load_fetch_settings,
    load_server_settings,
    load_storage_settings,
)
from .log_config import setup_logging
from .text_utils import clean_text, get_domain, is_valid_url, resolve_url
