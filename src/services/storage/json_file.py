"""
Local JSON File Storage

DESIGN DECISION: The ledger is stored as one JSON document under one
named key. The key maps to <data_dir>/<key>.json.

TRADEOFFS:
- The whole snapshot is rewritten on every change (fine for personal use)
- No versioning or migration: an incompatible file is discarded on load

Writes go to a temporary file next to the target and are moved into place
with os.replace, so a crash mid-write leaves the previous snapshot intact.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog
from pydantic import ValidationError
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from src.config import StorageSettings, get_settings
from src.models.finance import UserFinance
from src.services.storage.interface import (
    SnapshotStorageInterface,
    SnapshotWriteError,
)


logger = structlog.get_logger(__name__)


class JsonFileSnapshotStorage(SnapshotStorageInterface):
    """
    Snapshot storage backed by a single local JSON file.

    Complex fields are kept nested in the document; amounts are
    serialized as decimal strings so they reload without float drift.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        fsync_writes: Optional[bool] = None,
        save_attempts: Optional[int] = None,
        retry_wait_multiplier: float = 0.5,
        settings: Optional[StorageSettings] = None,
    ):
        if path is None or fsync_writes is None or save_attempts is None:
            settings = settings or get_settings().storage
        self._path = Path(path) if path is not None else settings.snapshot_path
        self._fsync = settings.fsync_writes if fsync_writes is None else fsync_writes
        self._attempts = settings.save_attempts if save_attempts is None else save_attempts
        self._wait_multiplier = retry_wait_multiplier

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[UserFinance]:
        """Read and validate the stored snapshot. Any problem means None."""
        if not self._path.exists():
            logger.info("snapshot_missing", path=str(self._path))
            return None

        try:
            payload = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("snapshot_unreadable", path=str(self._path), error=str(e))
            return None

        try:
            snapshot = UserFinance.from_json(payload)
        except (ValidationError, ValueError) as e:
            logger.warning(
                "snapshot_invalid",
                path=str(self._path),
                error=str(e).splitlines()[0],
            )
            return None

        logger.info(
            "snapshot_loaded",
            path=str(self._path),
            transactions=len(snapshot.transactions),
        )
        return snapshot

    def save(self, snapshot: UserFinance) -> bool:
        """Atomically replace the stored snapshot, retrying on OS errors."""
        payload = snapshot.to_json()
        retrying = Retrying(
            stop=stop_after_attempt(self._attempts),
            wait=wait_exponential(multiplier=self._wait_multiplier, max=4),
            retry=retry_if_exception_type(SnapshotWriteError),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._write(payload)
        except (SnapshotWriteError, RetryError) as e:
            logger.error(
                "snapshot_save_failed",
                path=str(self._path),
                attempts=self._attempts,
                error=str(e),
            )
            return False

        logger.debug("snapshot_saved", path=str(self._path), size=len(payload))
        return True

    def _write(self, payload: str) -> None:
        temp_name: Optional[str] = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                prefix=self._path.name + "-",
                suffix=".tmp",
                dir=self._path.parent,
                delete=False,
            ) as tf:
                temp_name = tf.name
                tf.write(payload)
                tf.flush()
                if self._fsync:
                    os.fsync(tf.fileno())
            os.replace(temp_name, self._path)
        except OSError as e:
            if temp_name and os.path.exists(temp_name):
                try:
                    os.unlink(temp_name)
                except OSError:
                    logger.warning("temp_file_cleanup_failed", temp_path=temp_name)
            raise SnapshotWriteError(f"Could not write {self._path}: {e}") from e
