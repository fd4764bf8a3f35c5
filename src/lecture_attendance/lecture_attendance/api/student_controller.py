from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from .common import json_errors, record_json


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/students/<student_id>/summary", methods=["GET"], endpoint="student_summary")
    @json_errors
    def student_summary(student_id: str):
        student = reports.get_student(student_id)
        rows = reports.student_dashboard(student)
        return jsonify(
            {
                "success": True,
                "student": {
                    "id": student.user_id,
                    "display_name": student.display_name,
                    "enrollment_id": student.enrollment_id,
                },
                "subjects": [
                    {
                        "subject_id": r.subject_id,
                        "name": r.name,
                        "code": r.code,
                        "total": r.summary.total,
                        "present": r.summary.present,
                        "pct": r.summary.pct,
                        "standing": r.standing.value,
                    }
                    for r in rows
                ],
            }
        )

    @app.route(
        "/api/students/<student_id>/subjects/<subject_id>/log",
        methods=["GET"],
        endpoint="student_subject_log",
    )
    @json_errors
    def student_subject_log(student_id: str, subject_id: str):
        reports.get_student(student_id)
        records = container.attendance_service.student_log(student_id, subject_id)
        return jsonify({"success": True, "records": [record_json(r) for r in records]})
