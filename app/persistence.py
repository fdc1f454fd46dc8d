from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from app.models import AssignmentSnapshot
from app.record_store import AssignmentDatabase

logger = logging.getLogger("assignment_tracker.persistence")


class SnapshotUnreadable(Exception):
    """The snapshot file is missing, unreadable or not a valid snapshot."""


class JsonSnapshotPersistence:
    """Mirrors an AssignmentDatabase into a single JSON file.

    Storage semantics:
    - ``save`` rewrites the whole file on every call, so cost grows with the
      total number of records, not with the size of the change.
    - A failed write is logged and dropped. The in-memory database stays
      authoritative and the file may lag behind it until the next good save.
    - Nothing coordinates with other processes using the same path.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def save(self, db: AssignmentDatabase) -> bool:
        data = db.to_snapshot().model_dump_json()
        try:
            self.path.write_text(data, encoding="utf-8")
        except OSError as e:
            logger.warning(
                "Snapshot write failed; in-memory state is ahead of the file",
                extra={"snapshot_path": str(self.path), "error": type(e).__name__, "detail": str(e)},
            )
            return False
        return True

    def load(self) -> AssignmentDatabase:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SnapshotUnreadable(f"Cannot read snapshot {self.path}: {type(e).__name__}") from e

        try:
            snapshot = AssignmentSnapshot.model_validate_json(raw)
        except ValidationError as e:
            raise SnapshotUnreadable(f"Malformed snapshot {self.path}: {e.error_count()} error(s)") from e

        return AssignmentDatabase.from_snapshot(snapshot, persistence=self)

    def load_or_empty(self) -> AssignmentDatabase:
        """Startup load. A missing or broken file is never fatal."""
        try:
            db = self.load()
        except SnapshotUnreadable as e:
            if self.path.exists():
                logger.warning("Ignoring unusable snapshot, starting empty: %s", e)
            else:
                logger.info("No snapshot at %s, starting empty", self.path)
            return AssignmentDatabase(persistence=self)

        logger.info(
            "Loaded snapshot (assignments=%s, users=%s) from %s",
            len(db.assignments),
            len(db.users),
            self.path,
        )
        return db

