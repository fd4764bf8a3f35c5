from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from ..assignments.resolver import AssignmentResolver
from ..common.datetime_utils import now_local
from ..common.validators import require_lecture_slots, require_non_empty
from ..core.constants import MAX_LECTURE_SLOTS
from ..roster.service import RosterLoader
from .ledger import AttendanceLedger
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveResult:
    record_ids: list[str]
    present: int
    absent: int


class AttendanceService:
    """Use case: an instructor marks one class for a date and a set of lecture slots."""

    def __init__(
        self,
        ledger: AttendanceLedger,
        resolver: AssignmentResolver,
        roster: RosterLoader,
        *,
        max_lecture_slots: int = MAX_LECTURE_SLOTS,
    ):
        self._ledger = ledger
        self._resolver = resolver
        self._roster = roster
        self._max_lecture_slots = int(max_lecture_slots)

    def save_class_attendance(
        self,
        *,
        faculty_id: str,
        branch_id: str,
        batch_id: str,
        subject_id: str,
        on_date: date,
        slots: Iterable[int],
        present_ids: Iterable[str],
        now: Optional[datetime] = None,
    ) -> SaveResult:
        # Rejected before anything is read or written.
        slots = require_lecture_slots(slots, self._max_lecture_slots)
        faculty_id = require_non_empty(faculty_id, "Faculty")
        branch_id = require_non_empty(branch_id, "Branch")
        batch_id = require_non_empty(batch_id, "Batch")
        subject_id = require_non_empty(subject_id, "Subject")

        self._resolver.ensure_assigned(
            faculty_id=faculty_id,
            branch_id=branch_id,
            batch_id=batch_id,
            subject_id=subject_id,
        )

        now = now or now_local()
        present = set(present_ids)
        students = self._roster.load_roster(branch_id, batch_id)

        records = [
            AttendanceRecord(
                date=on_date,
                student_id=s.user_id,
                subject_id=subject_id,
                branch_id=branch_id,
                batch_id=batch_id,
                is_present=s.user_id in present,
                marked_by=faculty_id,
                timestamp=now,
                lecture_slot=slot,
            )
            for slot in slots
            for s in students
        ]

        self._ledger.upsert(records)

        n_present = sum(1 for r in records if r.is_present)
        logger.info(
            "Saved attendance faculty=%s class=%s/%s/%s date=%s slots=%s students=%d",
            faculty_id,
            branch_id,
            batch_id,
            subject_id,
            on_date,
            slots,
            len(students),
        )
        return SaveResult(
            record_ids=[r.record_id for r in records],
            present=n_present,
            absent=len(records) - n_present,
        )

    def class_records(self, branch_id: str, batch_id: str, subject_id: str) -> list[AttendanceRecord]:
        """All records of a class, newest save first."""

        records = self._ledger.fetch_by_subject(branch_id, batch_id, subject_id)
        records.sort(key=lambda r: r.timestamp, reverse=True)
        return records

    def student_log(self, student_id: str, subject_id: str) -> list[AttendanceRecord]:
        """One student's entries in a subject: latest date first, then slot order."""

        records = [r for r in self._ledger.fetch_by_student(student_id) if r.subject_id == subject_id]
        records.sort(key=lambda r: r.lecture_slot)
        records.sort(key=lambda r: r.date, reverse=True)
        return records
