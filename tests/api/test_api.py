from __future__ import annotations

import pytest

from src.lecture_attendance.lecture_attendance.core.enums import Role
from src.lecture_attendance.lecture_attendance.directory.model import Branch, StudentPlacement, Subject, User
from src.lecture_attendance.lecture_attendance.main import create_app


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def _payload(**overrides):
    body = {
        "branch_id": "b_cse",
        "batch_id": "batch_cse_a",
        "subject_id": "sub_net",
        "date": "2024-01-10",
        "slots": [1],
        "present": ["stu_1", "stu_2"],
    }
    body.update(overrides)
    return body


def test_cascading_selection(client):
    branches = client.get("/api/faculty/fac_1/branches").get_json()
    batches = client.get("/api/faculty/fac_1/batches?branch_id=b_cse").get_json()
    subjects = client.get("/api/faculty/fac_1/subjects?branch_id=b_cse&batch_id=batch_cse_b").get_json()

    assert branches["branches"] == [{"id": "b_cse", "name": "Computer Science (CSE)"}]
    assert [b["id"] for b in batches["batches"]] == ["batch_cse_a", "batch_cse_b"]
    assert subjects["subjects"] == [{"id": "sub_net", "name": "Computer Networks", "code": "CS304"}]


def test_subjects_empty_without_batch(client):
    resp = client.get("/api/faculty/fac_1/subjects?branch_id=b_cse")
    assert resp.status_code == 200
    assert resp.get_json()["subjects"] == []


def test_roster(client):
    data = client.get("/api/classes/b_cse/batch_cse_a/roster").get_json()
    assert [s["roll_no"] for s in data["students"]] == ["01", "02"]


def test_save_and_resave_attendance(client, attendance_store):
    first = client.post("/api/faculty/fac_1/attendance", json=_payload())
    second = client.post("/api/faculty/fac_1/attendance", json=_payload(present=["stu_2"]))

    assert first.status_code == 200
    assert first.get_json()["saved"] == 2
    assert second.get_json()["absent"] == 1
    assert len(attendance_store.rows) == 2


def test_save_without_slots_is_bad_request(client, attendance_store):
    resp = client.post("/api/faculty/fac_1/attendance", json=_payload(slots=[]))

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert attendance_store.write_calls == 0


def test_save_with_bad_date_is_bad_request(client):
    resp = client.post("/api/faculty/fac_1/attendance", json=_payload(date="10/01/2024"))
    assert resp.status_code == 400


def test_save_for_unassigned_class_is_forbidden(client):
    resp = client.post("/api/faculty/fac_2/attendance", json=_payload())
    assert resp.status_code == 403


def test_class_summary_and_records(client):
    client.post("/api/faculty/fac_1/attendance", json=_payload(present=["stu_1"], slots=[1, 2]))

    summary = client.get("/api/classes/b_cse/batch_cse_a/sub_net/summary").get_json()
    records = client.get("/api/classes/b_cse/batch_cse_a/sub_net/records").get_json()

    by_id = {r["student_id"]: r for r in summary["rows"]}
    assert by_id["stu_1"]["pct"] == 100
    assert by_id["stu_2"]["standing"] == "LOW"
    assert len(records["records"]) == 4


def test_export_csv_download(client):
    client.post("/api/faculty/fac_1/attendance", json=_payload(present=[], slots=[2]))

    resp = client.get("/api/classes/b_cse/batch_cse_a/sub_net/export.csv?date=2024-01-10")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "Attendance_Computer_Networks_2024-01-10.csv" in resp.headers["Content-Disposition"]
    body = resp.data.decode("utf-8-sig")
    assert '"Absent"' in body
    assert '"2"' in body


def test_export_csv_with_non_ascii_subject(client, directory):
    directory.subjects[1] = Subject(subject_id="sub_net", name="计算机网络", code="CS304")
    client.post("/api/faculty/fac_1/attendance", json=_payload(present=["stu_1"]))

    resp = client.get("/api/classes/b_cse/batch_cse_a/sub_net/export.csv?date=2024-01-10")

    assert resp.status_code == 200
    disposition = resp.headers["Content-Disposition"]
    disposition.encode("latin-1")
    assert disposition.startswith("attachment")
    assert "filename*=UTF-8''" in disposition
    assert "计算机网络" in resp.data.decode("utf-8-sig")


def test_fractional_slot_is_bad_request(client, attendance_store):
    resp = client.post("/api/faculty/fac_1/attendance", json=_payload(slots=[1.9]))

    assert resp.status_code == 400
    assert attendance_store.write_calls == 0


def test_student_summary_and_log(client):
    client.post("/api/faculty/fac_1/attendance", json=_payload(present=["stu_1"]))

    summary = client.get("/api/students/stu_1/summary").get_json()
    log = client.get("/api/students/stu_1/subjects/sub_net/log").get_json()

    assert summary["student"]["id"] == "stu_1"
    assert {s["subject_id"]: s["pct"] for s in summary["subjects"]} == {"sub_net": 100, "sub_ds": 0}
    assert [r["status"] for r in log["records"]] == ["Present"]


def test_unknown_student_is_not_found(client):
    assert client.get("/api/students/ghost/summary").status_code == 404


def test_directory_changes_visible_on_next_request(client, directory):
    assert client.get("/api/faculty/fac_1/branches").get_json()["branches"][0]["name"] == "Computer Science (CSE)"
    client.get("/api/students/stu_1/summary")

    directory.branches[0] = Branch(branch_id="b_cse", name="Computer Science and Engineering")
    directory.users.append(
        User(
            user_id="stu_9",
            display_name="Neha Joshi",
            email="neha@college.test",
            role=Role.STUDENT,
            student=StudentPlacement("b_cse", "batch_cse_a", "0827CS219", "03"),
        )
    )

    branches = client.get("/api/faculty/fac_1/branches").get_json()["branches"]
    assert branches == [{"id": "b_cse", "name": "Computer Science and Engineering"}]
    assert client.get("/api/students/stu_9/summary").status_code == 200
