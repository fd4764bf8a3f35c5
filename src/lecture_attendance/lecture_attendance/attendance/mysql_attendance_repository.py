from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def read_attendance(self, flt: AttendanceFilter) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if flt.branch_id is not None:
            clauses.append("branch_id=%s")
            params.append(flt.branch_id)
        if flt.batch_id is not None:
            clauses.append("batch_id=%s")
            params.append(flt.batch_id)
        if flt.subject_id is not None:
            clauses.append("subject_id=%s")
            params.append(flt.subject_id)
        if flt.student_id is not None:
            clauses.append("student_id=%s")
            params.append(flt.student_id)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT record_id, work_date, student_id, subject_id, branch_id, batch_id,
                       lecture_slot, is_present, marked_by, saved_at
                FROM attendance_records
                {where}
                ORDER BY work_date DESC, lecture_slot ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    date=r["work_date"],
                    student_id=r["student_id"],
                    subject_id=r["subject_id"],
                    branch_id=r["branch_id"],
                    batch_id=r["batch_id"],
                    is_present=bool(r["is_present"]),
                    marked_by=r["marked_by"],
                    timestamp=r["saved_at"],
                    lecture_slot=int(r["lecture_slot"]),
                )
                for r in rows
            ]

    def write_attendance(self, records: Sequence[AttendanceRecord]) -> None:
        if not records:
            return

        # One transaction per call: db_cursor commits once or rolls everything back.
        # On a key collision an older save never overwrites a newer one.
        # saved_at must be assigned last, MySQL evaluates SET clauses left to right.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(
                    record_id, work_date, student_id, subject_id, branch_id, batch_id,
                    lecture_slot, is_present, marked_by, saved_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s) AS incoming
                ON DUPLICATE KEY UPDATE
                    is_present=IF(incoming.saved_at >= attendance_records.saved_at, incoming.is_present, attendance_records.is_present),
                    marked_by=IF(incoming.saved_at >= attendance_records.saved_at, incoming.marked_by, attendance_records.marked_by),
                    branch_id=IF(incoming.saved_at >= attendance_records.saved_at, incoming.branch_id, attendance_records.branch_id),
                    batch_id=IF(incoming.saved_at >= attendance_records.saved_at, incoming.batch_id, attendance_records.batch_id),
                    saved_at=GREATEST(attendance_records.saved_at, incoming.saved_at)
                """,
                [
                    (
                        r.record_id,
                        r.date,
                        r.student_id,
                        r.subject_id,
                        r.branch_id,
                        r.batch_id,
                        int(r.lecture_slot),
                        1 if r.is_present else 0,
                        r.marked_by,
                        r.timestamp,
                    )
                    for r in records
                ],
            )
