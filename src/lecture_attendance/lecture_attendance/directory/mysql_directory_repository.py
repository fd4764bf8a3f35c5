from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Batch, Branch, FacultyAssignment, StudentPlacement, Subject, User, parse_batch_selector
from .repository import DirectoryStore

_USER_COLUMNS = "user_id, display_name, email, role, branch_id, batch_id, enrollment_id, roll_no"


def _to_user(r: Dict[str, Any]) -> User:
    role = Role(r["role"])
    student = None
    if role == Role.STUDENT and r.get("branch_id") and r.get("batch_id"):
        student = StudentPlacement(
            branch_id=r["branch_id"],
            batch_id=r["batch_id"],
            enrollment_id=r.get("enrollment_id") or "",
            roll_no=r.get("roll_no") or "",
        )
    return User(
        user_id=r["user_id"],
        display_name=r["display_name"],
        email=r.get("email") or "",
        role=role,
        student=student,
    )


class MySQLDirectoryRepository(DirectoryStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_branches(self) -> Sequence[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT branch_id, name FROM branches ORDER BY name")
            rows = fetchall(cur)
            return [Branch(branch_id=r["branch_id"], name=r["name"]) for r in rows]

    def get_batches(self, branch_id: str) -> Sequence[Batch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT batch_id, name, branch_id
                FROM batches
                WHERE branch_id=%s
                ORDER BY name
                """,
                (branch_id,),
            )
            rows = fetchall(cur)
            return [Batch(batch_id=r["batch_id"], name=r["name"], branch_id=r["branch_id"]) for r in rows]

    def get_subjects(self) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT subject_id, name, code FROM subjects ORDER BY name")
            rows = fetchall(cur)
            return [Subject(subject_id=r["subject_id"], name=r["name"], code=r["code"]) for r in rows]

    def get_students(self, branch_id: str, batch_id: str) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE role=%s AND branch_id=%s AND batch_id=%s
                """,
                (Role.STUDENT.value, branch_id, batch_id),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def get_users(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users")
            return [_to_user(r) for r in fetchall(cur)]

    def get_assignments(self, faculty_id: Optional[str] = None) -> Sequence[FacultyAssignment]:
        clauses: list[str] = []
        params: list[object] = []
        if faculty_id is not None:
            clauses.append("faculty_id=%s")
            params.append(faculty_id)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT assignment_id, faculty_id, branch_id, batch_id, subject_id
                FROM faculty_assignments
                {where}
                ORDER BY assignment_id
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                FacultyAssignment(
                    assignment_id=r["assignment_id"],
                    faculty_id=r["faculty_id"],
                    branch_id=r["branch_id"],
                    batch=parse_batch_selector(r.get("batch_id")),
                    subject_id=r["subject_id"],
                )
                for r in rows
            ]
