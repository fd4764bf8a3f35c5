from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


def make_record_id(on_date: date, student_id: str, subject_id: str, lecture_slot: int) -> str:
    """Natural key of an attendance entry.

    Two saves for the same date/student/subject/slot always map to the same id.
    """

    return f"{on_date.strftime('%Y-%m-%d')}_{student_id}_{subject_id}_L{int(lecture_slot)}"


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's presence in one lecture slot."""

    date: date
    student_id: str
    subject_id: str
    branch_id: str
    batch_id: str
    is_present: bool
    marked_by: str
    timestamp: datetime
    lecture_slot: int = 1
    record_id: str = field(init=False, default="")

    def __post_init__(self):
        # Identity is always derived, never trusted from the caller.
        object.__setattr__(
            self,
            "record_id",
            make_record_id(self.date, self.student_id, self.subject_id, self.lecture_slot),
        )

    @property
    def status_label(self) -> str:
        return "Present" if self.is_present else "Absent"


@dataclass(frozen=True)
class AttendanceFilter:
    """Read filter for the persistence primitive. ``None`` fields are unconstrained."""

    branch_id: Optional[str] = None
    batch_id: Optional[str] = None
    subject_id: Optional[str] = None
    student_id: Optional[str] = None
