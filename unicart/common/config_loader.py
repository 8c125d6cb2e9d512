"""
Configuration Loader

Loads YAML configuration for the fetch adapter, the trigger server and
the item store. Secrets are read from the environment.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import ENRICH_SECRET_ENV

ENRICHMENT_CONFIG = 'enrichment.yaml'


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'enrichment.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_enrichment_settings() -> Dict[str, Any]:
    """
    Load the full enrichment configuration.

    Returns:
        Dictionary with 'fetch', 'server' and 'storage' sections
    """
    return load_config(ENRICHMENT_CONFIG)


def load_fetch_settings(settings: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load outbound fetch settings.

    Args:
        settings: Full settings dict (if None, loads from config)

    Returns:
        Dictionary with user_agent, accept, accept_language, timeout

    Example:
        {
            'user_agent': 'Mozilla/5.0 (Macintosh; ...)',
            'accept': 'text/html,application/xhtml+xml,...',
            'accept_language': 'en-US,en;q=0.9',
            'timeout': 30,
        }
    """
    if settings is None:
        settings = load_enrichment_settings()
    return settings.get('fetch', {})


def load_server_settings(settings: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load trigger server settings.

    Args:
        settings: Full settings dict (if None, loads from config)

    Returns:
        Dictionary with host, port, max_workers
    """
    if settings is None:
        settings = load_enrichment_settings()
    return settings.get('server', {})


def load_storage_settings(settings: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load item store settings.

    Args:
        settings: Full settings dict (if None, loads from config)

    Returns:
        Dictionary with the store path
    """
    if settings is None:
        settings = load_enrichment_settings()
    return settings.get('storage', {})


def get_enrich_secret() -> str:
    """
    Get the shared secret guarding the internal enrich trigger.

    Returns:
        Secret from ENRICH_SECRET, or empty string if unset
    """
    return os.environ.get(ENRICH_SECRET_ENV, "").strip()
