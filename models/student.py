# models/student.py
from sqlalchemy import Column, Integer, String, DateTime, Text

from models.base import Base, utcnow

# attribute name -> JSON / form key, in registration-form order
STUDENT_FIELDS = (
    ("sr_no", "srNo"),
    ("college_name", "collegeName"),
    ("zone", "zone"),
    ("name", "name"),
    ("email", "email"),
    ("contact_number", "contactNumber"),
    ("tenth_percentage", "tenthPercentage"),
    ("tenth_year_of_passing", "tenthYearOfPassing"),
    ("twelfth_percentage", "twelfthPercentage"),
    ("twelfth_year_of_passing", "twelfthYearOfPassing"),
    ("diploma_percentage", "diplomaPercentage"),
    ("diploma_yop", "diplomaYOP"),
    ("degree", "degree"),
    ("stream", "stream"),
    ("degree_percentage", "degreePercentage"),
    ("degree_yop", "degreeYOP"),
    ("pg_degree", "pgDegree"),
    ("pg_stream", "pgStream"),
    ("post_grad_percentage", "postGradPercentage"),
    ("pg_yop", "pgYOP"),
    ("current_backlog", "currentBacklog"),
    ("remarks", "remarks"),
    ("gender", "gender"),
    ("btech_college_state", "btechCollegeState"),
    ("btech_roll_number", "btechRollNumber"),
    ("refer_by", "referBy"),
    ("program_type", "programType"),
)


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    sr_no = Column(String(100), nullable=False, unique=True, index=True)
    college_name = Column(String(500), nullable=True, index=True)
    zone = Column(String(500), nullable=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=True)
    contact_number = Column(String(500), nullable=True)

    tenth_percentage = Column(String(500), nullable=True)
    tenth_year_of_passing = Column(String(500), nullable=True)
    twelfth_percentage = Column(String(500), nullable=True)
    twelfth_year_of_passing = Column(String(500), nullable=True)
    diploma_percentage = Column(String(500), nullable=True)
    diploma_yop = Column(String(500), nullable=True)
    degree = Column(String(500), nullable=True)
    stream = Column(String(500), nullable=True)
    degree_percentage = Column(String(500), nullable=True)
    degree_yop = Column(String(500), nullable=True)
    pg_degree = Column(String(500), nullable=True)
    pg_stream = Column(String(500), nullable=True)
    post_grad_percentage = Column(String(500), nullable=True)
    pg_yop = Column(String(500), nullable=True)

    current_backlog = Column(String(500), nullable=True)
    remarks = Column(Text, nullable=True)
    gender = Column(String(500), nullable=True)
    btech_college_state = Column(String(500), nullable=True)
    btech_roll_number = Column(String(500), nullable=True)
    refer_by = Column(String(500), nullable=True)
    program_type = Column(String(500), nullable=True, index=True)

    # attached document: stored path ("" when nothing was uploaded) and submitted filename
    pdf = Column(String(1024), nullable=False, default="")
    pdf_original_name = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=utcnow)

    def to_dict(self) -> dict:
        data = {"id": self.id}
        for attr, key in STUDENT_FIELDS:
            data[key] = getattr(self, attr)
        data["pdf"] = self.pdf or ""
        data["pdfOriginalName"] = self.pdf_original_name
        data["createdAt"] = self.created_at.isoformat() if self.created_at else None
        return data
