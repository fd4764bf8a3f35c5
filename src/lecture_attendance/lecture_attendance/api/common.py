from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..attendance.model import AttendanceRecord
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def json_errors(view):
    """Translate domain errors into ``{"success": false}`` JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 403
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return jsonify({"success": False, "message": "Internal error"}), 500

    return wrapper


def record_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.record_id,
        "date": r.date.strftime("%Y-%m-%d"),
        "student_id": r.student_id,
        "subject_id": r.subject_id,
        "branch_id": r.branch_id,
        "batch_id": r.batch_id,
        "lecture_slot": r.lecture_slot,
        "is_present": r.is_present,
        "status": r.status_label,
        "marked_by": r.marked_by,
        "timestamp": r.timestamp.isoformat(),
    }
