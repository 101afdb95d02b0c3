"""
Tests for the per-student PDF report
"""
import os

import reportlab
from reportlab.lib.pagesizes import letter
from reportlab.pdfbase import pdfmetrics

from conftest import make_app, student_form
from controllers.report_controller import report_filename, report_storage_name
from controllers.student_controller import StudentSchema
from models.student import Student
from utils.report_pdf import (
    FONT_NAME,
    FONT_SIZE,
    MARGIN,
    REPORT_FIELDS,
    layout_pages,
    register_report_font,
    render_student_report,
    report_lines,
)

VERA_TTF = os.path.join(os.path.dirname(reportlab.__file__), "fonts", "Vera.ttf")
TEXT_WIDTH = letter[0] - 2 * MARGIN


def _student(**overrides):
    return Student(**StudentSchema(**student_form(**overrides)).model_dump())


class TestReportLines:

    def test_every_field_in_fixed_order(self):
        lines = report_lines(_student())

        assert len(lines) == len(REPORT_FIELDS) == 26
        assert [line.split(": ", 1)[0] for line in lines] == [label for label, _ in REPORT_FIELDS]
        assert lines[0] == "Sr.No: S-001"
        assert lines[3] == "Name: Asha Verma"
        assert lines[6] == "10th %: 91.4"
        assert lines[-1] == "Refer By: Placement cell"

    def test_missing_values_render_empty(self):
        student = Student(sr_no="S-9", name="Only Name")

        lines = report_lines(student)

        assert lines[1] == "College Name: "
        assert "Name: Only Name" in lines

    def test_multiline_remarks_stay_on_one_line(self):
        lines = report_lines(_student(remarks="first\nsecond"))

        assert "Remarks: first second" in lines


class TestRenderReport:

    def test_writes_complete_pdf(self, tmp_path):
        path = str(tmp_path / "report.pdf")

        render_student_report(_student(), path)

        with open(path, "rb") as fh:
            data = fh.read()
        assert data.startswith(b"%PDF")
        assert data.rstrip().endswith(b"%%EOF")
        assert os.listdir(tmp_path) == ["report.pdf"]

    def test_overwrites_previous_report(self, tmp_path):
        path = str(tmp_path / "report.pdf")
        with open(path, "wb") as fh:
            fh.write(b"stale")

        render_student_report(_student(), path)

        with open(path, "rb") as fh:
            assert fh.read(4) == b"%PDF"


class TestReportLayout:

    def test_long_remarks_wrap_within_the_page(self):
        words = ["word"] * 600

        pages = layout_pages(_student(remarks=" ".join(words)))

        assert len(pages) > 1
        for page in pages:
            for line in page:
                assert pdfmetrics.stringWidth(line, FONT_NAME, FONT_SIZE) <= TEXT_WIDTH
        flat = " ".join(line for page in pages for line in page)
        assert "Remarks: " + " ".join(words) in flat

    def test_unbroken_value_is_split_between_characters(self):
        pages = layout_pages(_student(btechRollNumber="X" * 400))

        lines = [line for page in pages for line in page]
        assert all(pdfmetrics.stringWidth(line, FONT_NAME, FONT_SIZE) <= TEXT_WIDTH for line in lines)
        assert "".join(lines).count("X") == 400

    def test_short_record_fits_one_page(self):
        pages = layout_pages(_student())

        assert len(pages) == 1
        assert len(pages[0]) == len(REPORT_FIELDS)
        assert pages[0][0] == "Sr.No: S-001"


class TestReportFont:

    def test_default_is_helvetica(self):
        assert register_report_font(None) == "Helvetica"
        assert register_report_font("") == "Helvetica"

    def test_ttf_font_is_registered_once(self, tmp_path):
        name = register_report_font(VERA_TTF)

        assert name == "Report-Vera"
        assert name in pdfmetrics.getRegisteredFontNames()
        assert register_report_font(VERA_TTF) == name

        path = str(tmp_path / "report.pdf")
        render_student_report(_student(name="Zoë Müller", remarks="naïve " * 200), path, name)
        with open(path, "rb") as fh:
            assert fh.read(4) == b"%PDF"

    def test_configured_font_is_used_for_downloads(self, tmp_path):
        app = make_app(tmp_path, REPORT_FONT_PATH=VERA_TTF)
        client = app.test_client()
        client.post("/signup", json={"username": "registrar", "password": "secret123"})
        client.post("/login", data={"username": "registrar", "password": "secret123"})
        client.post("/student/register", data=student_form(), content_type="multipart/form-data")

        response = client.get("/student/report?srNo=S-001")

        assert response.status_code == 200
        assert response.get_data().startswith(b"%PDF")
        assert "Report-Vera" in pdfmetrics.getRegisteredFontNames()
        response.close()


class TestReportNames:

    def test_download_name_is_sanitized(self):
        assert report_filename(Student(id=1, sr_no="S-001")) == "student_report_S-001.pdf"
        assert report_filename(Student(id=2, sr_no="../../etc/passwd")) == "student_report_etc_passwd.pdf"

    def test_download_name_falls_back_to_record_id(self):
        assert report_filename(Student(id=7, sr_no="///")) == "student_report_7.pdf"
        assert report_filename(Student(id=8, sr_no="१२३")) == "student_report_8.pdf"

    def test_serials_that_sanitize_alike_get_distinct_files(self):
        spaced = Student(id=1, sr_no="A B")
        underscored = Student(id=2, sr_no="A_B")

        assert report_filename(spaced) == report_filename(underscored)
        assert report_storage_name(spaced) != report_storage_name(underscored)

    def test_non_ascii_serials_get_distinct_files(self):
        first = Student(id=3, sr_no="१२३")
        second = Student(id=4, sr_no="४५६")

        assert report_storage_name(first) == "student_report_3.pdf"
        assert report_storage_name(first) != report_storage_name(second)


class TestReportEndpoint:

    def test_download_for_existing_student(self, auth_client, register, app):
        register()

        response = auth_client.get("/student/report?srNo=S-001")

        assert response.status_code == 200
        assert response.mimetype == "application/pdf"
        disposition = response.headers["Content-Disposition"]
        assert disposition.startswith("attachment")
        assert "student_report_S-001.pdf" in disposition
        assert response.get_data().startswith(b"%PDF")
        response.close()
        assert os.listdir(app.config["REPORT_FOLDER"]) == ["student_report_1_S-001.pdf"]

    def test_colliding_serials_do_not_overwrite_each_other(self, auth_client, register, app):
        register(srNo="A B")
        register(srNo="A_B")

        for serial in ("A B", "A_B"):
            response = auth_client.get("/student/report", query_string={"srNo": serial})
            assert response.status_code == 200
            response.close()

        assert sorted(os.listdir(app.config["REPORT_FOLDER"])) == [
            "student_report_1_A_B.pdf",
            "student_report_2_A_B.pdf",
        ]

    def test_long_remarks_download(self, auth_client, register):
        register(remarks="placement drive feedback " * 150)

        response = auth_client.get("/student/report?srNo=S-001")

        assert response.status_code == 200
        assert response.get_data().startswith(b"%PDF")
        response.close()

    def test_unknown_student_produces_no_document(self, auth_client, app):
        response = auth_client.get("/student/report?srNo=nope")

        assert response.status_code == 404
        assert response.get_data(as_text=True) == "Student not found"
        assert os.listdir(app.config["REPORT_FOLDER"]) == []

    def test_without_serial_serves_download_page(self, auth_client):
        response = auth_client.get("/student/report")

        assert response.status_code == 200
        assert b"Download Student Report" in response.data
        response.close()
