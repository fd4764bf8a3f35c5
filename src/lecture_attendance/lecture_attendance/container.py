from __future__ import annotations

from dataclasses import dataclass

from .assignments.resolver import AssignmentResolver
from .attendance.ledger import AttendanceLedger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import LOW_ATTENDANCE_THRESHOLD, MAX_LECTURE_SLOTS
from .database.connection import DBConfig, DatabaseConnection
from .directory.cache import DirectoryCache
from .directory.mysql_directory_repository import MySQLDirectoryRepository
from .directory.repository import DirectoryStore
from .reports.service import ReportService
from .roster.service import RosterLoader


@dataclass(frozen=True)
class Container:
    directory_repo: DirectoryStore
    attendance_repo: AttendanceRepository

    directory_cache: DirectoryCache
    resolver: AssignmentResolver
    roster: RosterLoader
    ledger: AttendanceLedger
    attendance_service: AttendanceService
    report_service: ReportService


def wire(
    directory_repo: DirectoryStore,
    attendance_repo: AttendanceRepository,
    *,
    low_threshold: int = LOW_ATTENDANCE_THRESHOLD,
    max_lecture_slots: int = MAX_LECTURE_SLOTS,
) -> Container:
    """Build services on top of any pair of repositories."""

    cache = DirectoryCache(directory_repo)
    resolver = AssignmentResolver(directory_repo, cache)
    roster = RosterLoader(directory_repo)
    ledger = AttendanceLedger(attendance_repo)

    attendance_service = AttendanceService(ledger, resolver, roster, max_lecture_slots=max_lecture_slots)
    report_service = ReportService(ledger, roster, resolver, cache, low_threshold=low_threshold)

    return Container(
        directory_repo=directory_repo,
        attendance_repo=attendance_repo,
        directory_cache=cache,
        resolver=resolver,
        roster=roster,
        ledger=ledger,
        attendance_service=attendance_service,
        report_service=report_service,
    )


def build_container(
    *,
    db_config: dict,
    low_threshold: int = LOW_ATTENDANCE_THRESHOLD,
    max_lecture_slots: int = MAX_LECTURE_SLOTS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        MySQLDirectoryRepository(conn),
        MySQLAttendanceRepository(conn),
        low_threshold=low_threshold,
        max_lecture_slots=max_lecture_slots,
    )
