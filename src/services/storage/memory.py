"""In-memory snapshot storage, for tests and dry runs."""

from typing import Optional

from pydantic import ValidationError

from src.models.finance import UserFinance
from src.services.storage.interface import SnapshotStorageInterface


class InMemorySnapshotStorage(SnapshotStorageInterface):
    """
    Keeps the serialized snapshot as a string.

    Storing the JSON (rather than the object) means load() goes through
    the same validation as file storage does.
    """

    def __init__(self, payload: Optional[str] = None, fail_saves: bool = False):
        self.payload = payload
        self.fail_saves = fail_saves
        self.save_count = 0
        self.load_count = 0

    def load(self) -> Optional[UserFinance]:
        self.load_count += 1
        if self.payload is None:
            return None
        try:
            return UserFinance.from_json(self.payload)
        except (ValidationError, ValueError):
            return None

    def save(self, snapshot: UserFinance) -> bool:
        if self.fail_saves:
            return False
        self.payload = snapshot.to_json()
        self.save_count += 1
        return True
