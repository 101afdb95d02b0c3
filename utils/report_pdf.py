# utils/report_pdf.py
import os
import uuid

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import simpleSplit

# Fixed label order for the student report
REPORT_FIELDS = (
    ("Sr.No", "sr_no"),
    ("College Name", "college_name"),
    ("Zone (State Name)", "zone"),
    ("Name", "name"),
    ("Email ID", "email"),
    ("Contact Number", "contact_number"),
    ("10th %", "tenth_percentage"),
    ("10th Year of Passing", "tenth_year_of_passing"),
    ("12th %", "twelfth_percentage"),
    ("12th Year of Passing", "twelfth_year_of_passing"),
    ("Diploma %", "diploma_percentage"),
    ("Diploma YOP", "diploma_yop"),
    ("Degree", "degree"),
    ("Stream (B.Tech Branch)", "stream"),
    ("Degree %", "degree_percentage"),
    ("Degree YOP", "degree_yop"),
    ("PG Degree", "pg_degree"),
    ("PG Stream", "pg_stream"),
    ("Post Grad %", "post_grad_percentage"),
    ("PG YOP", "pg_yop"),
    ("Whether having current backlog", "current_backlog"),
    ("Remarks", "remarks"),
    ("Gender", "gender"),
    ("Btech College State", "btech_college_state"),
    ("Btech Roll Number", "btech_roll_number"),
    ("Refer By", "refer_by"),
)

FONT_NAME = "Helvetica"
FONT_SIZE = 11
LINE_HEIGHT = 16
MARGIN = 72


def report_lines(student) -> list:
    lines = []
    for label, attr in REPORT_FIELDS:
        value = getattr(student, attr, None)
        # multi-line remarks stay on one report line
        text = " ".join(str(value).splitlines()) if value is not None else ""
        lines.append(f"{label}: {text}")
    return lines


def register_report_font(font_path=None) -> str:
    """Register a TTF font for reports and return its name; Helvetica when no path is given."""
    if not font_path:
        return FONT_NAME
    name = "Report-" + os.path.splitext(os.path.basename(font_path))[0]
    if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(name, font_path))
    return name


def wrap_line(line: str, font_name: str, max_width: float) -> list:
    """Wrap at spaces; a single word wider than the column is broken between characters."""
    wrapped = []
    for chunk in simpleSplit(line, font_name, FONT_SIZE, max_width) or [""]:
        while pdfmetrics.stringWidth(chunk, font_name, FONT_SIZE) > max_width:
            cut = len(chunk) - 1
            while cut > 1 and pdfmetrics.stringWidth(chunk[:cut], font_name, FONT_SIZE) > max_width:
                cut -= 1
            wrapped.append(chunk[:cut])
            chunk = chunk[cut:]
        wrapped.append(chunk)
    return wrapped


def layout_pages(student, font_name: str = FONT_NAME, pagesize=letter) -> list:
    """Wrap every report line to the text column and group the result into pages."""
    width, height = pagesize
    max_width = width - 2 * MARGIN
    per_page = int((height - 2 * MARGIN) // LINE_HEIGHT) + 1

    wrapped = []
    for line in report_lines(student):
        wrapped.extend(wrap_line(line, font_name, max_width))

    return [wrapped[i:i + per_page] for i in range(0, len(wrapped), per_page)] or [[]]


def render_student_report(student, path: str, font_name: str = FONT_NAME) -> str:
    """
    Draw the wrapped label/value lines, starting a new page when the current one is full.
    The PDF is written to a temp file next to `path` and renamed into place, so a reader
    never sees a partially written document.
    """
    tmp_path = f"{path}.{uuid.uuid4().hex}.tmp"
    _, height = letter

    c = canvas.Canvas(tmp_path, pagesize=letter)
    c.setTitle(f"Student Report {getattr(student, 'sr_no', '')}")

    for page in layout_pages(student, font_name, letter):
        c.setFont(font_name, FONT_SIZE)
        y = height - MARGIN
        for line in page:
            c.drawString(MARGIN, y, line)
            y -= LINE_HEIGHT
        c.showPage()

    try:
        c.save()
        os.replace(tmp_path, path)
    except Exception:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    return path
