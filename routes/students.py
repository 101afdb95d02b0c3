# routes/students.py
from flask import Blueprint, request, jsonify, current_app, send_file
from pydantic import ValidationError

from controllers.student_controller import register_student, get_record_by_serial, filter_records
from controllers.report_controller import generate_report
from routes.views import serve_view
from utils.auth import login_required
from utils.errors import DuplicateSerial, RecordNotFound
from utils.uploads import UPLOAD_FIELD

bp = Blueprint('students', __name__)


@bp.route("/student/register", methods=["POST"])
@login_required
def register():
    try:
        register_student(
            request.form.to_dict(),
            request.files.get(UPLOAD_FIELD),
            current_app.config["UPLOAD_FOLDER"],
        )
    except ValidationError as ve:
        return jsonify({"detail": ve.errors(include_url=False, include_context=False)}), 422
    except DuplicateSerial as e:
        return f"Student with Sr.No {e.sr_no} already registered", 409
    except Exception:
        current_app.logger.exception("Student registration failed")
        return "Error registering student", 500

    return "Student registered successfully", 200


@bp.route("/student", methods=["GET"])
@login_required
def retrieve():
    sr_no = request.args.get("srNo")
    if not sr_no:
        return "srNo is required", 400

    try:
        student = get_record_by_serial(sr_no)
    except RecordNotFound:
        return "Student not found", 404
    except Exception:
        current_app.logger.exception("Retrieving student %s failed", sr_no)
        return "Error retrieving student", 500

    return jsonify(student.to_dict())


@bp.route("/student/filter", methods=["GET"])
@login_required
def filter_students():
    try:
        students = filter_records(
            college=request.args.get("filterCollege"),
            program_type=request.args.get("filterProgramType"),
        )
    except Exception:
        current_app.logger.exception("Filtering students failed")
        return "Error filtering students", 500

    return jsonify([s.to_dict() for s in students])


@bp.route("/student/report", methods=["GET"])
@login_required
def report():
    sr_no = request.args.get("srNo")
    if sr_no is None:
        # no query: the download form
        return serve_view("download_report.html")

    try:
        path, file_name = generate_report(sr_no, current_app.config["REPORT_FOLDER"])
    except RecordNotFound:
        return "Student not found", 404
    except Exception:
        current_app.logger.exception("Generating report for %s failed", sr_no)
        return "Error generating report", 500

    return send_file(path, as_attachment=True, download_name=file_name, mimetype="application/pdf")
