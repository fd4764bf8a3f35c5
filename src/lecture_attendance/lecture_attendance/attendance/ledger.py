from __future__ import annotations

import logging
from typing import Sequence

from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Owns record identity and upsert semantics over the attendance store.

    Store failures are not caught here; they reach the caller unchanged.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def upsert(self, records: Sequence[AttendanceRecord]) -> None:
        # Same natural key inside one call: the last entry wins.
        by_id: dict[str, AttendanceRecord] = {}
        for r in records:
            by_id[r.record_id] = r

        if not by_id:
            return

        self._attendance.write_attendance(list(by_id.values()))
        logger.debug("Upserted %d attendance records", len(by_id))

    def fetch_by_subject(self, branch_id: str, batch_id: str, subject_id: str) -> list[AttendanceRecord]:
        return list(
            self._attendance.read_attendance(
                AttendanceFilter(branch_id=branch_id, batch_id=batch_id, subject_id=subject_id)
            )
        )

    def fetch_by_student(self, student_id: str) -> list[AttendanceRecord]:
        return list(self._attendance.read_attendance(AttendanceFilter(student_id=student_id)))
