from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import LOW_ATTENDANCE_THRESHOLD
from ..core.enums import AttendanceStanding
from ..directory.model import Subject, User


@dataclass(frozen=True)
class AttendanceSummary:
    total: int
    present: int
    pct: int


@dataclass(frozen=True)
class StudentSummaryRow:
    student_id: str
    display_name: str
    roll_no: str
    enrollment_id: str
    summary: AttendanceSummary
    standing: AttendanceStanding


@dataclass(frozen=True)
class SubjectSummaryRow:
    subject_id: str
    name: str
    code: str
    summary: AttendanceSummary
    standing: AttendanceStanding


def percent(present: int, total: int) -> int:
    """100 * present / total rounded half up; 0 when there is nothing to count."""

    if total <= 0:
        return 0
    # Integer form of floor(100 * present / total + 0.5).
    return (200 * present + total) // (2 * total)


def summarize(records: Iterable[AttendanceRecord]) -> AttendanceSummary:
    total = 0
    present = 0
    for r in records:
        total += 1
        if r.is_present:
            present += 1
    return AttendanceSummary(total=total, present=present, pct=percent(present, total))


def classify(pct: int, threshold: int = LOW_ATTENDANCE_THRESHOLD) -> AttendanceStanding:
    return AttendanceStanding.LOW if pct < threshold else AttendanceStanding.ON_TRACK


def summarize_by_student(
    records: Sequence[AttendanceRecord],
    roster: Sequence[User],
    *,
    threshold: int = LOW_ATTENDANCE_THRESHOLD,
) -> list[StudentSummaryRow]:
    by_student: dict[str, list[AttendanceRecord]] = {}
    for r in records:
        by_student.setdefault(r.student_id, []).append(r)

    rows = []
    for s in roster:
        summary = summarize(by_student.get(s.user_id, []))
        rows.append(
            StudentSummaryRow(
                student_id=s.user_id,
                display_name=s.display_name,
                roll_no=s.roll_no,
                enrollment_id=s.enrollment_id,
                summary=summary,
                standing=classify(summary.pct, threshold),
            )
        )
    return rows


def summarize_by_subject(
    records: Sequence[AttendanceRecord],
    subjects: Sequence[Subject],
    *,
    threshold: int = LOW_ATTENDANCE_THRESHOLD,
) -> list[SubjectSummaryRow]:
    by_subject: dict[str, list[AttendanceRecord]] = {}
    for r in records:
        by_subject.setdefault(r.subject_id, []).append(r)

    rows = []
    for sub in subjects:
        summary = summarize(by_subject.get(sub.subject_id, []))
        rows.append(
            SubjectSummaryRow(
                subject_id=sub.subject_id,
                name=sub.name,
                code=sub.code,
                summary=summary,
                standing=classify(summary.pct, threshold),
            )
        )
    return rows
