from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import pytest

from src.lecture_attendance.lecture_attendance.attendance.model import AttendanceFilter, AttendanceRecord
from src.lecture_attendance.lecture_attendance.container import wire
from src.lecture_attendance.lecture_attendance.core.enums import Role
from src.lecture_attendance.lecture_attendance.directory.model import (
    AllBatchesInBranch,
    Batch,
    Branch,
    FacultyAssignment,
    SpecificBatch,
    StudentPlacement,
    Subject,
    User,
)


@dataclass
class InMemoryDirectory:
    branches: list[Branch]
    batches: list[Batch]
    subjects: list[Subject]
    users: list[User]
    assignments: list[FacultyAssignment]
    calls: Counter = field(default_factory=Counter)

    def get_branches(self):
        self.calls["get_branches"] += 1
        return list(self.branches)

    def get_batches(self, branch_id: str):
        self.calls["get_batches"] += 1
        return [b for b in self.batches if b.branch_id == branch_id]

    def get_subjects(self):
        self.calls["get_subjects"] += 1
        return list(self.subjects)

    def get_students(self, branch_id: str, batch_id: str):
        self.calls["get_students"] += 1
        return [
            u
            for u in self.users
            if u.student and u.student.branch_id == branch_id and u.student.batch_id == batch_id
        ]

    def get_users(self):
        self.calls["get_users"] += 1
        return list(self.users)

    def get_assignments(self, faculty_id: Optional[str] = None):
        self.calls["get_assignments"] += 1
        return [a for a in self.assignments if faculty_id is None or a.faculty_id == faculty_id]


class InMemoryAttendance:
    """Key-value attendance store keyed by record_id, last write by timestamp wins."""

    def __init__(self):
        self.rows: dict[str, AttendanceRecord] = {}
        self.write_calls = 0

    def read_attendance(self, flt: AttendanceFilter):
        out = []
        for r in self.rows.values():
            if flt.branch_id is not None and r.branch_id != flt.branch_id:
                continue
            if flt.batch_id is not None and r.batch_id != flt.batch_id:
                continue
            if flt.subject_id is not None and r.subject_id != flt.subject_id:
                continue
            if flt.student_id is not None and r.student_id != flt.student_id:
                continue
            out.append(r)
        return out

    def write_attendance(self, records):
        self.write_calls += 1
        for r in records:
            existing = self.rows.get(r.record_id)
            if existing is None or r.timestamp >= existing.timestamp:
                self.rows[r.record_id] = r


def make_student(user_id: str, name: str, batch_id: str, roll_no: str, branch_id: str = "b_cse") -> User:
    return User(
        user_id=user_id,
        display_name=name,
        email=f"{user_id}@college.test",
        role=Role.STUDENT,
        student=StudentPlacement(
            branch_id=branch_id,
            batch_id=batch_id,
            enrollment_id=f"0827CS21{user_id[-1]}",
            roll_no=roll_no,
        ),
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 10, 9, 0, 0)


@pytest.fixture
def directory() -> InMemoryDirectory:
    return InMemoryDirectory(
        branches=[
            Branch(branch_id="b_cse", name="Computer Science (CSE)"),
            Branch(branch_id="b_ece", name="Electronics (ECE)"),
        ],
        batches=[
            Batch(batch_id="batch_cse_a", name="CSE Year 2 - Batch A", branch_id="b_cse"),
            Batch(batch_id="batch_cse_b", name="CSE Year 2 - Batch B", branch_id="b_cse"),
            Batch(batch_id="batch_ece_a", name="ECE Year 2 - Batch A", branch_id="b_ece"),
        ],
        subjects=[
            Subject(subject_id="sub_ds", name="Data Structures", code="CS201"),
            Subject(subject_id="sub_net", name="Computer Networks", code="CS304"),
            Subject(subject_id="sub_math", name="Engineering Mathematics", code="M101"),
        ],
        users=[
            User(user_id="fac_1", display_name="Dr. Rao", email="rao@college.test", role=Role.FACULTY),
            User(user_id="fac_2", display_name="Dr. Iyer", email="iyer@college.test", role=Role.FACULTY),
            make_student("stu_1", "Rahul Singh", "batch_cse_a", "02"),
            make_student("stu_2", "Priya Patel", "batch_cse_a", "01"),
            make_student("stu_3", "Aman Verma", "batch_cse_b", "01"),
        ],
        assignments=[
            FacultyAssignment(
                assignment_id="a1",
                faculty_id="fac_1",
                branch_id="b_cse",
                batch=SpecificBatch("batch_cse_a"),
                subject_id="sub_ds",
            ),
            FacultyAssignment(
                assignment_id="a2",
                faculty_id="fac_1",
                branch_id="b_cse",
                batch=AllBatchesInBranch(),
                subject_id="sub_net",
            ),
            FacultyAssignment(
                assignment_id="a3",
                faculty_id="fac_2",
                branch_id="b_ece",
                batch=SpecificBatch("batch_ece_a"),
                subject_id="sub_math",
            ),
        ],
    )


@pytest.fixture
def attendance_store() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def container(directory, attendance_store):
    return wire(directory, attendance_store)
