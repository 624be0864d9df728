"""
Abstract Snapshot Storage Interface

DESIGN DECISION: We define an abstract interface for persisting the ledger.
This allows us to:
1. Swap the local JSON file for another backend later
2. Use in-memory storage for testing
3. Keep ledger logic decoupled from storage implementation

The whole ledger is one value, so the interface is just load and save.
There are no partial updates.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.models.finance import UserFinance


class SnapshotStorageInterface(ABC):
    """
    Abstract interface for ledger snapshot storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> Optional[UserFinance]:
        """
        Load the stored snapshot.

        Returns:
            The snapshot, or None if nothing usable is stored.
            A missing, unreadable or structurally invalid payload is
            reported as None, never raised.
        """
        pass

    @abstractmethod
    def save(self, snapshot: UserFinance) -> bool:
        """
        Overwrite the stored snapshot.

        Args:
            snapshot: The full ledger to persist

        Returns:
            True if saved successfully, False otherwise.
            Write failures are reported, not raised.
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class SnapshotWriteError(StorageError):
    """Writing the snapshot to its backing store failed."""
    pass
