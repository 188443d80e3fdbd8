"""
Storage module.

Handles persistence and retrieval of users, ideas, articles and analytics
counters via Supabase or other backends.
"""

from src.storage.base import Store, StoreError
from src.storage.supabase import SupabaseStore, MockSupabaseStore

__all__ = [
    "Store",
    "StoreError",
    "SupabaseStore",
    "MockSupabaseStore",
]
