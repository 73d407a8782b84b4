"""In-memory key-value store for development and testing.

Can be configured at runtime to fail reads or writes, which lets tests
exercise the storage-failure paths without touching the filesystem.
"""

from storefront.storage.port import KeyValueStore, StorageError


class InMemoryStore(KeyValueStore):
    """Configurable in-memory store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.fail_reads: bool = False
        self.fail_writes: bool = False
        self.writes: int = 0

    def configure(self, fail_reads: bool = False, fail_writes: bool = False) -> None:
        """Configure failure behaviour at runtime."""
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def load(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError(f"Read of {key!r} failed")
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError(f"Write of {key!r} failed")
        self.data[key] = value
        self.writes += 1
