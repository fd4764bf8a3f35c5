from __future__ import annotations

import io
from datetime import date

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.exceptions import ValidationError
from .common import json_errors, record_json


def register(app: Flask, container: Container) -> None:
    resolver = container.resolver

    @app.route("/api/faculty/<faculty_id>/branches", methods=["GET"], endpoint="faculty_branches")
    @json_errors
    def faculty_branches(faculty_id: str):
        options = resolver.available_branches(resolver.resolve_options(faculty_id))
        return jsonify({"success": True, "branches": [{"id": o.id, "name": o.name} for o in options]})

    @app.route("/api/faculty/<faculty_id>/batches", methods=["GET"], endpoint="faculty_batches")
    @json_errors
    def faculty_batches(faculty_id: str):
        branch_id = request.args.get("branch_id", "")
        options = resolver.available_batches(resolver.resolve_options(faculty_id), branch_id)
        return jsonify({"success": True, "batches": [{"id": o.id, "name": o.name} for o in options]})

    @app.route("/api/faculty/<faculty_id>/subjects", methods=["GET"], endpoint="faculty_subjects")
    @json_errors
    def faculty_subjects(faculty_id: str):
        branch_id = request.args.get("branch_id", "")
        batch_id = request.args.get("batch_id", "")
        options = resolver.available_subjects(resolver.resolve_options(faculty_id), branch_id, batch_id)
        return jsonify(
            {
                "success": True,
                "subjects": [{"id": o.id, "name": o.name, "code": o.code} for o in options],
            }
        )

    @app.route("/api/classes/<branch_id>/<batch_id>/roster", methods=["GET"], endpoint="class_roster")
    @json_errors
    def class_roster(branch_id: str, batch_id: str):
        students = container.roster.load_roster(branch_id, batch_id)
        return jsonify(
            {
                "success": True,
                "students": [
                    {
                        "id": s.user_id,
                        "display_name": s.display_name,
                        "roll_no": s.roll_no,
                        "enrollment_id": s.enrollment_id,
                    }
                    for s in students
                ],
            }
        )

    @app.route("/api/faculty/<faculty_id>/attendance", methods=["POST"], endpoint="faculty_save_attendance")
    @json_errors
    def faculty_save_attendance(faculty_id: str):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Expected a JSON object")

        slots = data.get("slots") or []
        present = data.get("present") or []
        if not isinstance(slots, list) or not isinstance(present, list):
            raise ValidationError("'slots' and 'present' must be lists")

        result = container.attendance_service.save_class_attendance(
            faculty_id=faculty_id,
            branch_id=data.get("branch_id", ""),
            batch_id=data.get("batch_id", ""),
            subject_id=data.get("subject_id", ""),
            on_date=parse_iso_date(data.get("date") or date.today().strftime("%Y-%m-%d")),
            slots=slots,
            present_ids=[str(p) for p in present],
        )
        return jsonify(
            {
                "success": True,
                "saved": len(result.record_ids),
                "present": result.present,
                "absent": result.absent,
                "record_ids": result.record_ids,
            }
        )

    @app.route("/api/classes/<branch_id>/<batch_id>/<subject_id>/records", methods=["GET"], endpoint="class_records")
    @json_errors
    def class_records(branch_id: str, batch_id: str, subject_id: str):
        records = container.attendance_service.class_records(branch_id, batch_id, subject_id)
        return jsonify({"success": True, "records": [record_json(r) for r in records]})

    @app.route("/api/classes/<branch_id>/<batch_id>/<subject_id>/summary", methods=["GET"], endpoint="class_summary")
    @json_errors
    def class_summary(branch_id: str, batch_id: str, subject_id: str):
        rows = container.report_service.class_summary(branch_id, batch_id, subject_id)
        return jsonify(
            {
                "success": True,
                "rows": [
                    {
                        "student_id": r.student_id,
                        "display_name": r.display_name,
                        "roll_no": r.roll_no,
                        "enrollment_id": r.enrollment_id,
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
        "/api/classes/<branch_id>/<batch_id>/<subject_id>/export.csv",
        methods=["GET"],
        endpoint="class_export_csv",
    )
    @json_errors
    def class_export_csv(branch_id: str, batch_id: str, subject_id: str):
        date_s = request.args.get("date") or date.today().strftime("%Y-%m-%d")
        export = container.report_service.export_class_csv(branch_id, batch_id, subject_id, parse_iso_date(date_s))

        return send_file(
            io.BytesIO(export.content.encode("utf-8-sig")),
            mimetype="text/csv",
            as_attachment=True,
            download_name=export.filename,
        )
