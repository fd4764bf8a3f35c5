from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.constants import ALL_BATCHES
from ..core.enums import Role


@dataclass(frozen=True)
class Branch:
    """Academic department/stream."""

    branch_id: str
    name: str


@dataclass(frozen=True)
class Batch:
    """Cohort of students inside exactly one branch."""

    batch_id: str
    name: str
    branch_id: str


@dataclass(frozen=True)
class Subject:
    subject_id: str
    name: str
    code: str


@dataclass(frozen=True)
class StudentPlacement:
    """Academic placement carried only by STUDENT users."""

    branch_id: str
    batch_id: str
    enrollment_id: str
    roll_no: str = ""


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no DB access. ``student`` is set only for
    ``Role.STUDENT``.
    """

    user_id: str
    display_name: str
    email: str
    role: Role
    student: Optional[StudentPlacement] = None

    @property
    def roll_no(self) -> str:
        return self.student.roll_no if self.student else ""

    @property
    def enrollment_id(self) -> str:
        return self.student.enrollment_id if self.student else ""


@dataclass(frozen=True)
class SpecificBatch:
    batch_id: str

    def covers(self, batch_id: str) -> bool:
        return self.batch_id == batch_id


@dataclass(frozen=True)
class AllBatchesInBranch:
    def covers(self, batch_id: str) -> bool:
        return True


BatchSelector = Union[SpecificBatch, AllBatchesInBranch]


def parse_batch_selector(raw: Optional[str]) -> BatchSelector:
    """Convert the stored batch column into a selector.

    The store keeps the wildcard as the ``ALL`` sentinel (or NULL); nothing
    past this function compares against the string.
    """

    if raw is None or raw == ALL_BATCHES:
        return AllBatchesInBranch()
    return SpecificBatch(batch_id=raw)


@dataclass(frozen=True)
class FacultyAssignment:
    """Grant of teaching responsibility for a branch/batch/subject triple."""

    assignment_id: str
    faculty_id: str
    branch_id: str
    batch: BatchSelector
    subject_id: str

    @property
    def is_wildcard(self) -> bool:
        return isinstance(self.batch, AllBatchesInBranch)

    def covers(self, branch_id: str, batch_id: str) -> bool:
        return self.branch_id == branch_id and self.batch.covers(batch_id)
