from __future__ import annotations

from ..directory.model import User
from ..directory.repository import DirectoryStore


class RosterLoader:
    """Use case: list the students enrolled in one batch."""

    def __init__(self, directory: DirectoryStore):
        self._directory = directory

    def load_roster(self, branch_id: str, batch_id: str) -> list[User]:
        if not branch_id or not batch_id:
            return []

        # A naive join can return a student twice; keep one entry per user_id.
        unique: dict[str, User] = {}
        for s in self._directory.get_students(branch_id, batch_id):
            unique[s.user_id] = s

        return sorted(unique.values(), key=lambda s: s.roll_no or "")
