"""Key-value store factory.

Provides create_store() to pick an implementation from settings:
- JsonFileStore when a storage path is configured
- InMemoryStore otherwise (development and testing)
"""

from storefront.config import StorefrontSettings
from storefront.storage.file_adapter import JsonFileStore
from storefront.storage.memory_adapter import InMemoryStore
from storefront.storage.port import KeyValueStore, StorageError

__all__ = ["InMemoryStore", "JsonFileStore", "KeyValueStore", "StorageError", "create_store"]


def create_store(settings: StorefrontSettings) -> KeyValueStore:
    """Return the key-value store configured by ``settings``."""
    if settings.storage_path is not None:
        return JsonFileStore(settings.storage_path)
    return InMemoryStore()
