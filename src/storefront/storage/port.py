"""Durable key-value storage port (abstract interface).

The cart is persisted through this contract so that business logic never
reaches into a concrete storage API. Adapters must raise ``StorageError`` for
any read or write failure; callers decide how to degrade.
"""

from abc import ABC, abstractmethod


class StorageError(Exception):
    """A storage read or write failed."""


class KeyValueStore(ABC):
    """Abstract key-value store holding string values."""

    @abstractmethod
    def load(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None when absent."""
        ...

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...
