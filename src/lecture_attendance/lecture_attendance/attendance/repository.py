from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceFilter, AttendanceRecord


class AttendanceRepository(Protocol):
    def read_attendance(self, flt: AttendanceFilter) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def write_attendance(self, records: Sequence[AttendanceRecord]) -> None:
        """Insert or replace records keyed by ``record_id``.

        Implementations must apply the whole sequence atomically.
        """

        raise NotImplementedError
