from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.exceptions import AuthorizationError
from ..directory.cache import DirectoryCache
from ..directory.model import FacultyAssignment, Subject, User
from ..directory.repository import DirectoryStore
from .model import Option, SubjectOption

logger = logging.getLogger(__name__)


def _distinct(ids) -> list[str]:
    # First-seen order.
    return list(dict.fromkeys(ids))


class AssignmentResolver:
    """Use case: work out which class contexts an instructor may act on.

    Selection cascades branch -> batch -> subject. Each step only narrows
    the assignment list it is given; an empty earlier step yields empty
    later steps.
    """

    def __init__(self, directory: DirectoryStore, cache: DirectoryCache):
        self._directory = directory
        self._cache = cache

    def resolve_options(self, faculty_id: str) -> list[FacultyAssignment]:
        assignments = list(self._directory.get_assignments(faculty_id))

        branches = self._cache.branches()
        subjects = self._cache.subjects()
        for a in assignments:
            if a.branch_id not in branches:
                logger.warning("Assignment %s references unknown branch %s", a.assignment_id, a.branch_id)
            if a.subject_id not in subjects:
                logger.warning("Assignment %s references unknown subject %s", a.assignment_id, a.subject_id)
        return assignments

    def available_branches(self, assignments: Sequence[FacultyAssignment]) -> list[Option]:
        return [
            Option(id=branch_id, name=self._cache.branch_name(branch_id))
            for branch_id in _distinct(a.branch_id for a in assignments)
        ]

    def available_batches(self, assignments: Sequence[FacultyAssignment], branch_id: Optional[str]) -> list[Option]:
        if not branch_id:
            return []

        in_branch = [a for a in assignments if a.branch_id == branch_id]
        if any(a.is_wildcard for a in in_branch):
            return [Option(id=b.batch_id, name=b.name) for b in self._cache.batches_for(branch_id)]

        batch_ids = _distinct(a.batch.batch_id for a in in_branch if not a.is_wildcard)
        return [Option(id=batch_id, name=self._cache.batch_name(branch_id, batch_id)) for batch_id in batch_ids]

    def available_subjects(
        self,
        assignments: Sequence[FacultyAssignment],
        branch_id: Optional[str],
        batch_id: Optional[str],
    ) -> list[SubjectOption]:
        if not branch_id or not batch_id:
            return []

        subject_ids = _distinct(a.subject_id for a in assignments if a.covers(branch_id, batch_id))
        out: list[SubjectOption] = []
        for subject_id in subject_ids:
            subject = self._cache.subject(subject_id)
            out.append(
                SubjectOption(
                    id=subject_id,
                    name=subject.name if subject else subject_id,
                    code=subject.code if subject else "",
                )
            )
        return out

    def ensure_assigned(self, *, faculty_id: str, branch_id: str, batch_id: str, subject_id: str) -> None:
        for a in self._directory.get_assignments(faculty_id):
            if a.subject_id == subject_id and a.covers(branch_id, batch_id):
                return
        raise AuthorizationError("You are not assigned to this class")

    def subjects_for_student(self, student: User) -> list[Subject]:
        """Subjects taught to the student's batch by any instructor, sorted by name."""

        placement = student.student
        if placement is None:
            return []

        subject_ids = {
            a.subject_id
            for a in self._directory.get_assignments(None)
            if a.covers(placement.branch_id, placement.batch_id)
        }
        subjects = self._cache.subjects()
        found = [subjects[sid] for sid in subject_ids if sid in subjects]
        found.sort(key=lambda s: s.name)
        return found
