# controllers/student_controller.py
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from flask import current_app

from db.database import SessionLocal
from models.student import Student
from utils.errors import DuplicateSerial, RecordNotFound, StorageError
from utils.uploads import save_upload, discard_upload


PERCENTAGE_FIELDS = (
    "tenth_percentage",
    "twelfth_percentage",
    "diploma_percentage",
    "degree_percentage",
    "post_grad_percentage",
)

YEAR_FIELDS = (
    "tenth_year_of_passing",
    "twelfth_year_of_passing",
    "diploma_yop",
    "degree_yop",
    "pg_yop",
)


# ---- Pydantic models ----
class StudentSchema(BaseModel):
    """Registration form, keyed by the camelCase names the views submit."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    sr_no: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=200)
    email: Optional[EmailStr] = None

    college_name: Optional[str] = Field(None, max_length=500)
    zone: Optional[str] = Field(None, max_length=500)
    contact_number: Optional[str] = Field(None, max_length=20)

    tenth_percentage: Optional[str] = Field(None, max_length=500)
    tenth_year_of_passing: Optional[str] = Field(None, max_length=500)
    twelfth_percentage: Optional[str] = Field(None, max_length=500)
    twelfth_year_of_passing: Optional[str] = Field(None, max_length=500)
    diploma_percentage: Optional[str] = Field(None, max_length=500)
    diploma_yop: Optional[str] = Field(None, alias="diplomaYOP", max_length=500)
    degree: Optional[str] = Field(None, max_length=500)
    stream: Optional[str] = Field(None, max_length=500)
    degree_percentage: Optional[str] = Field(None, max_length=500)
    degree_yop: Optional[str] = Field(None, alias="degreeYOP", max_length=500)
    pg_degree: Optional[str] = Field(None, max_length=500)
    pg_stream: Optional[str] = Field(None, max_length=500)
    post_grad_percentage: Optional[str] = Field(None, max_length=500)
    pg_yop: Optional[str] = Field(None, alias="pgYOP", max_length=500)

    current_backlog: Optional[str] = Field(None, max_length=500)
    remarks: Optional[str] = Field(None, max_length=5000)
    gender: Optional[str] = Field(None, max_length=500)
    btech_college_state: Optional[str] = Field(None, max_length=500)
    btech_roll_number: Optional[str] = Field(None, max_length=500)
    refer_by: Optional[str] = Field(None, max_length=500)
    program_type: Optional[str] = Field(None, max_length=500)

    @field_validator("sr_no", "name")
    @classmethod
    def not_blank(cls, value):
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, value):
        # HTML forms submit "" for untouched inputs
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(*PERCENTAGE_FIELDS)
    @classmethod
    def check_percentage(cls, value):
        if not value:
            return value
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            raise ValueError("must be a number between 0 and 100")
        if not 0 <= number <= 100:
            raise ValueError("must be a number between 0 and 100")
        return value

    @field_validator(*YEAR_FIELDS)
    @classmethod
    def check_year(cls, value):
        if not value:
            return value
        stripped = value.strip()
        if len(stripped) != 4 or not stripped.isdigit():
            raise ValueError("must be a four digit year")
        return value


# ---- DB helpers ----
def create_record(fields: dict, pdf_path: str = "", pdf_original_name: Optional[str] = None) -> Student:
    """
    Insert a validated submission (snake_case keys, as produced by StudentSchema).
    Raises DuplicateSerial if the serial number exists, StorageError on DB failure.
    """
    session = SessionLocal()
    try:
        existing = session.query(Student).filter(Student.sr_no == fields["sr_no"]).first()
        if existing:
            raise DuplicateSerial(fields["sr_no"])

        student = Student(**fields, pdf=pdf_path or "", pdf_original_name=pdf_original_name)
        session.add(student)
        session.commit()
        session.refresh(student)
        return student
    except IntegrityError:
        # lost a race with a concurrent insert of the same srNo
        session.rollback()
        raise DuplicateSerial(fields["sr_no"])
    except SQLAlchemyError as exc:
        session.rollback()
        raise StorageError("Could not save student record") from exc
    finally:
        session.close()


def get_record_by_serial(sr_no: str) -> Student:
    session = SessionLocal()
    try:
        student = session.query(Student).filter(Student.sr_no == sr_no).first()
    except SQLAlchemyError as exc:
        raise StorageError("Could not read student record") from exc
    finally:
        session.close()

    if student is None:
        raise RecordNotFound(sr_no)
    return student


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def filter_records(college: Optional[str] = None, program_type: Optional[str] = None) -> List[Student]:
    """
    College: case-insensitive substring. Program type: exact.
    With neither constraint every record is returned.
    """
    session = SessionLocal()
    try:
        query = session.query(Student)
        if college:
            query = query.filter(Student.college_name.ilike(f"%{_escape_like(college)}%", escape="\\"))
        if program_type:
            query = query.filter(Student.program_type == program_type)
        return query.order_by(Student.id).all()
    except SQLAlchemyError as exc:
        raise StorageError("Could not filter student records") from exc
    finally:
        session.close()


# ---- Main controller ----
def register_student(payload: dict, file_storage, upload_dir: str) -> Student:
    """
    Validates payload, stores the optional upload, then saves the record.
    The upload is removed again if the record cannot be saved.
    May raise pydantic.ValidationError on invalid input.
    """
    # Validate before touching the filesystem
    validated = StudentSchema(**payload).model_dump()

    pdf_path, original_name = save_upload(file_storage, upload_dir)
    try:
        student = create_record(validated, pdf_path, original_name)
    except Exception:
        if pdf_path:
            current_app.logger.info("Removing upload %s after failed registration", pdf_path)
            discard_upload(pdf_path)
        raise

    current_app.logger.info("Registered student srNo=%s id=%s", student.sr_no, student.id)
    return student
