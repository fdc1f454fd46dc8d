from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Generic, Iterator, List, Optional, Protocol, TypeVar

from app.models import Assignment, AssignmentSnapshot, ForexPair, User


class _Keyed(Protocol):
    id: int


R = TypeVar("R", bound=_Keyed)


class RecordStore(Generic[R]):
    """Keyed collection of records, indexed by ``record.id``.

    Not synchronized on its own: every call must happen inside the owning
    database's ``transaction()``.
    """

    def __init__(self, records: Optional[Dict[int, R]] = None):
        self._records: Dict[int, R] = dict(records or {})

    def upsert(self, record: R) -> None:
        # Overwriting keeps the key's original slot in iteration order.
        self._records[record.id] = record

    def get(self, record_id: int) -> Optional[R]:
        return self._records.get(record_id)

    def get_all(self) -> List[R]:
        return list(self._records.values())

    def delete(self, record_id: int) -> None:
        self._records.pop(record_id, None)

    def as_dict(self) -> Dict[int, R]:
        return dict(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records


class CredentialStore(RecordStore[User]):
    """User records with a username lookup for the login flow.

    Usernames are not unique. ``find_by_username`` resolves duplicates as
    first-registered wins: iteration follows insertion order, which the JSON
    snapshot preserves across restarts.
    """

    def find_by_username(self, username: str) -> Optional[User]:
        for user in self._records.values():
            if user.username == username:
                return user
        return None

    def authenticate(self, username: str, password: str) -> Optional[User]:
        # Plain equality on both fields; any matching pair logs in.
        for user in self._records.values():
            if user.username == username and user.password == password:
                return user
        return None


class SnapshotWriter(Protocol):
    def save(self, db) -> bool: ...


class _Database:
    """One lock around every collection of an instantiation.

    All reads and writes go through ``transaction()``. A mutating transaction
    saves the snapshot before the lock is released, so the file always
    reflects a state the API actually held.
    """

    def __init__(self, *, persistence: Optional[SnapshotWriter] = None):
        self._lock = threading.Lock()
        self.persistence = persistence

    @contextmanager
    def transaction(self, *, persist: bool = False) -> Iterator["_Database"]:
        with self._lock:
            yield self
            if persist and self.persistence is not None:
                self.persistence.save(self)


class AssignmentDatabase(_Database):
    def __init__(
        self,
        *,
        assignments: Optional[Dict[int, Assignment]] = None,
        users: Optional[Dict[int, User]] = None,
        persistence: Optional[SnapshotWriter] = None,
    ):
        super().__init__(persistence=persistence)
        self.assignments: RecordStore[Assignment] = RecordStore(assignments)
        self.users = CredentialStore(users)

    def to_snapshot(self) -> AssignmentSnapshot:
        return AssignmentSnapshot(assignments=self.assignments.as_dict(), users=self.users.as_dict())

    @classmethod
    def from_snapshot(
        cls, snapshot: AssignmentSnapshot, *, persistence: Optional[SnapshotWriter] = None
    ) -> "AssignmentDatabase":
        # Rekey by each record's own id; the file's map keys are not trusted.
        return cls(
            assignments={a.id: a for a in snapshot.assignments.values()},
            users={u.id: u for u in snapshot.users.values()},
            persistence=persistence,
        )


class ForexDatabase(_Database):
    """Quote board. Memory only; state is lost when the process exits."""

    def __init__(self, *, forex_pairs: Optional[Dict[int, ForexPair]] = None):
        super().__init__(persistence=None)
        self.forex_pairs: RecordStore[ForexPair] = RecordStore(forex_pairs)
