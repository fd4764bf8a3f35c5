from __future__ import annotations

import csv
import io
import re
from datetime import date
from typing import Mapping, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import EXPORT_DATE_FORMAT
from ..directory.model import Subject, User

CSV_HEADER = ["Date", "Slot", "Roll No", "Student Name", "Enrollment ID", "Subject", "Status", "Marked By"]


def to_csv(
    records: Sequence[AttendanceRecord],
    student_lookup: Mapping[str, User],
    subject_lookup: Mapping[str, Subject],
    marker_lookup: Optional[Mapping[str, User]] = None,
) -> str:
    """Render records as CSV text, one row per record in input order.

    Every field is quoted so names containing commas or quotes survive.
    """

    marker_lookup = marker_lookup or {}
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)

    for r in records:
        student = student_lookup.get(r.student_id)
        subject = subject_lookup.get(r.subject_id)
        marker = marker_lookup.get(r.marked_by)
        writer.writerow(
            [
                r.date.strftime(EXPORT_DATE_FORMAT),
                r.lecture_slot,
                student.roll_no if student else "",
                student.display_name if student else "Unknown",
                student.enrollment_id if student else "",
                subject.name if subject else r.subject_id,
                r.status_label,
                marker.display_name if marker else r.marked_by,
            ]
        )
    return out.getvalue()


def export_filename(subject_name: str, on_date: date) -> str:
    """Download name for a class export.

    Header delimiters (quotes, commas, semicolons) and path separators are
    replaced; letters outside ASCII are kept for the RFC 5987 header form.
    """

    safe = re.sub(r"[^\w.-]+", "_", subject_name.strip()).strip("_") or "subject"
    return f"Attendance_{safe}_{on_date.strftime(EXPORT_DATE_FORMAT)}.csv"
