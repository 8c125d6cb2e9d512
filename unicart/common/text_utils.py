"""
Text Utilities

Helper functions for text cleanup and URL handling.
"""

from typing import Optional
from urllib.parse import urljoin, urlparse

_WEB_SCHEMES = ('http', 'https')


def clean_text(text: Optional[str]) -> str:
    """Collapse whitespace runs and strip."""
    if not text:
        return ""
    return ' '.join(text.split()).strip()


def is_valid_url(url: str) -> bool:
    """
    Check that a string is an absolute http(s) URL with a host.

    Args:
        url: Candidate URL

    Returns:
        True if the URL can be fetched
    """
    if not url or not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url.strip())
        return parsed.scheme in _WEB_SCHEMES and bool(parsed.hostname)
    except ValueError:
        return False


def get_domain(url: str) -> Optional[str]:
    """
    Get the bare host of a URL.

    Args:
        url: Any URL

    Returns:
        Lowercase host with a leading "www." removed, or None if unparsable
    """
    if not url:
        return None
    try:
        hostname = urlparse(url.strip()).hostname
    except ValueError:
        return None
    if not hostname:
        return None
    if hostname.startswith('www.'):
        hostname = hostname[4:]
    return hostname or None


def resolve_url(raw: Optional[str], base_url: str) -> str:
    """
    Resolve a possibly relative URL against the page it came from.

    Args:
        raw: URL as found on the page ("/img/x.jpg", "//cdn/x.jpg", ...)
        base_url: URL of the page

    Returns:
        Absolute http(s) URL, or empty string if it cannot be resolved
    """
    raw = clean_text(raw)
    if not raw:
        return ""
    try:
        resolved = urljoin(base_url, raw)
        parsed = urlparse(resolved)
        if parsed.scheme not in _WEB_SCHEMES or not parsed.hostname:
            return ""
    except ValueError:
        return ""
    return resolved
