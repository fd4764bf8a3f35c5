from __future__ import annotations

from typing import Optional, Sequence

from .model import Batch, Branch, Subject, User
from .repository import DirectoryStore


class DirectoryCache:
    """Read-through id -> record lookup maps over a DirectoryStore.

    Entries are loaded on first access and dropped by ``invalidate()``. The
    web app invalidates before every request, so a cache lives for one
    request. A user id missing from the map triggers one reload of the user
    list. Students per batch are not cached here; the roster loader reads
    them fresh.
    """

    def __init__(self, store: DirectoryStore):
        self._store = store
        self._branches: Optional[dict[str, Branch]] = None
        self._subjects: Optional[dict[str, Subject]] = None
        self._users: Optional[dict[str, User]] = None
        self._batches: dict[str, list[Batch]] = {}

    def invalidate(self) -> None:
        self._branches = None
        self._subjects = None
        self._users = None
        self._batches.clear()

    def branches(self) -> dict[str, Branch]:
        if self._branches is None:
            self._branches = {b.branch_id: b for b in self._store.get_branches()}
        return self._branches

    def subjects(self) -> dict[str, Subject]:
        if self._subjects is None:
            self._subjects = {s.subject_id: s for s in self._store.get_subjects()}
        return self._subjects

    def users(self) -> dict[str, User]:
        if self._users is None:
            self._users = {u.user_id: u for u in self._store.get_users()}
        return self._users

    def batches_for(self, branch_id: str) -> Sequence[Batch]:
        if branch_id not in self._batches:
            self._batches[branch_id] = list(self._store.get_batches(branch_id))
        return self._batches[branch_id]

    def branch_name(self, branch_id: str) -> str:
        branch = self.branches().get(branch_id)
        return branch.name if branch else branch_id

    def batch_name(self, branch_id: str, batch_id: str) -> str:
        for b in self.batches_for(branch_id):
            if b.batch_id == batch_id:
                return b.name
        return batch_id

    def subject(self, subject_id: str) -> Optional[Subject]:
        return self.subjects().get(subject_id)

    def user(self, user_id: str) -> Optional[User]:
        user = self.users().get(user_id)
        if user is None:
            self._users = None
            user = self.users().get(user_id)
        return user
