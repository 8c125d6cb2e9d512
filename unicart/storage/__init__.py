"""
Persistence for wishlist items.

Modules:
    item_store - ItemStore merge-style upserts keyed by item id
"""

from .item_store import DELETE_FIELD, ItemStore

__all__ = ['ItemStore', 'DELETE_FIELD']
