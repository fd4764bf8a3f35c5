from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Batch, Branch, FacultyAssignment, Subject, User


class DirectoryStore(Protocol):
    """Read-only repository for reference data, users and assignments.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_branches(self) -> Sequence[Branch]:
        raise NotImplementedError

    def get_batches(self, branch_id: str) -> Sequence[Batch]:
        raise NotImplementedError

    def get_subjects(self) -> Sequence[Subject]:
        raise NotImplementedError

    def get_students(self, branch_id: str, batch_id: str) -> Sequence[User]:
        """Raw student rows for a batch. May contain the same student twice."""

        raise NotImplementedError

    def get_users(self) -> Sequence[User]:
        raise NotImplementedError

    def get_assignments(self, faculty_id: Optional[str] = None) -> Sequence[FacultyAssignment]:
        """Assignments of one instructor, or of everybody when ``faculty_id`` is None."""

        raise NotImplementedError
