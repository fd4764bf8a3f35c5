from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from ..assignments.resolver import AssignmentResolver
from ..attendance.ledger import AttendanceLedger
from ..core.constants import LOW_ATTENDANCE_THRESHOLD
from ..core.enums import Role
from ..core.exceptions import NotFoundError
from ..directory.cache import DirectoryCache
from ..directory.model import User
from ..roster.service import RosterLoader
from .aggregator import StudentSummaryRow, SubjectSummaryRow, summarize_by_student, summarize_by_subject
from .exporter import export_filename, to_csv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str


class ReportService:
    def __init__(
        self,
        ledger: AttendanceLedger,
        roster: RosterLoader,
        resolver: AssignmentResolver,
        cache: DirectoryCache,
        *,
        low_threshold: int = LOW_ATTENDANCE_THRESHOLD,
    ):
        self._ledger = ledger
        self._roster = roster
        self._resolver = resolver
        self._cache = cache
        self._low_threshold = int(low_threshold)

    def get_student(self, student_id: str) -> User:
        user = self._cache.user(student_id)
        if not user or user.role != Role.STUDENT:
            raise NotFoundError("Student not found")
        return user

    def class_summary(self, branch_id: str, batch_id: str, subject_id: str) -> list[StudentSummaryRow]:
        roster = self._roster.load_roster(branch_id, batch_id)
        records = self._ledger.fetch_by_subject(branch_id, batch_id, subject_id)
        return summarize_by_student(records, roster, threshold=self._low_threshold)

    def student_dashboard(self, student: User) -> list[SubjectSummaryRow]:
        subjects = self._resolver.subjects_for_student(student)
        records = self._ledger.fetch_by_student(student.user_id)
        return summarize_by_subject(records, subjects, threshold=self._low_threshold)

    def export_class_csv(self, branch_id: str, batch_id: str, subject_id: str, on_date: date) -> CsvExport:
        records = self._ledger.fetch_by_subject(branch_id, batch_id, subject_id)
        records.sort(key=lambda r: r.timestamp, reverse=True)

        students = {s.user_id: s for s in self._roster.load_roster(branch_id, batch_id)}
        subject = self._cache.subject(subject_id)

        content = to_csv(records, students, self._cache.subjects(), self._cache.users())
        filename = export_filename(subject.name if subject else subject_id, on_date)
        logger.info("Exported %d attendance rows to %s", len(records), filename)
        return CsvExport(filename=filename, content=content)
