# controllers/report_controller.py
import os
from typing import Tuple

from flask import current_app
from werkzeug.utils import secure_filename

from controllers.student_controller import get_record_by_serial
from models.student import Student
from utils.report_pdf import register_report_font, render_student_report
from utils.uploads import ensure_directory


def report_filename(student: Student) -> str:
    """Name offered to the browser; falls back to the record id when srNo has no safe characters."""
    return f"student_report_{secure_filename(student.sr_no) or student.id}.pdf"


def report_storage_name(student: Student) -> str:
    # the record id keeps serials that sanitize alike ("A B" / "A_B") in separate files
    safe = secure_filename(student.sr_no)
    return f"student_report_{student.id}_{safe}.pdf" if safe else f"student_report_{student.id}.pdf"


def generate_report(sr_no: str, report_dir: str) -> Tuple[str, str]:
    """
    Render the report for one student and return (path, download_name).
    Raises RecordNotFound before anything is written when srNo is unknown.
    """
    student = get_record_by_serial(sr_no)

    path = os.path.join(ensure_directory(report_dir), report_storage_name(student))
    font_name = register_report_font(current_app.config.get("REPORT_FONT_PATH"))
    render_student_report(student, path, font_name)

    current_app.logger.info("Generated report %s for srNo=%s", path, sr_no)
    return path, report_filename(student)
