"""Services package."""

from src.services.storage import (
    InMemorySnapshotStorage,
    JsonFileSnapshotStorage,
    SnapshotStorageInterface,
    SnapshotWriteError,
    StorageError,
)

__all__ = [
    "InMemorySnapshotStorage",
    "JsonFileSnapshotStorage",
    "SnapshotStorageInterface",
    "SnapshotWriteError",
    "StorageError",
]
