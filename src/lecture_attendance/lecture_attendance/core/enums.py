from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role stored on every user row."""

    ADMIN = "ADMIN"
    FACULTY = "FACULTY"
    STUDENT = "STUDENT"


class AttendanceStanding(str, Enum):
    """Display classification of an attendance percentage."""

    LOW = "LOW"
    ON_TRACK = "ON_TRACK"
