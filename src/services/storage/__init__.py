"""
Storage Services Package

Provides the abstract snapshot interface and concrete implementations.
The ledger is persisted as a local JSON file, but the backend is swappable.
"""

from src.services.storage.interface import (
    SnapshotStorageInterface,
    SnapshotWriteError,
    StorageError,
)
from src.services.storage.json_file import JsonFileSnapshotStorage
from src.services.storage.memory import InMemorySnapshotStorage

__all__ = [
    # Interfaces
    "SnapshotStorageInterface",
    # Exceptions
    "SnapshotWriteError",
    "StorageError",
    # Implementations
    "InMemorySnapshotStorage",
    "JsonFileSnapshotStorage",
]
