"""
Student records - test configuration and fixtures
"""
import pytest

from app import create_app
from db.database import SessionLocal


STUDENT_FORM = {
    "srNo": "S-001",
    "collegeName": "Government Engineering College, Pune",
    "zone": "Maharashtra",
    "name": "Asha Verma",
    "email": "asha.verma@example.com",
    "contactNumber": "9876543210",
    "tenthPercentage": "91.4",
    "tenthYearOfPassing": "2016",
    "twelfthPercentage": "88%",
    "twelfthYearOfPassing": "2018",
    "diplomaPercentage": "",
    "diplomaYOP": "",
    "degree": "B.Tech",
    "stream": "Computer Science",
    "degreePercentage": "78.2",
    "degreeYOP": "2022",
    "pgDegree": "",
    "pgStream": "",
    "postGradPercentage": "",
    "pgYOP": "",
    "currentBacklog": "No",
    "remarks": "Strong in data structures",
    "gender": "Female",
    "btechCollegeState": "Maharashtra",
    "btechRollNumber": "GEC18CS042",
    "referBy": "Placement cell",
    "programType": "Full Time",
}


def student_form(**overrides):
    data = dict(STUDENT_FORM)
    data.update(overrides)
    return data


def make_app(tmp_path, **overrides):
    config = {
        "TESTING": True,
        "DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "REPORT_FOLDER": str(tmp_path / "reports"),
        # fast hash for tests
        "PASSWORD_HASH_METHOD": "pbkdf2:sha256:1000",
        "SESSION_LIFETIME_MINUTES": 30,
    }
    config.update(overrides)
    return create_app(config)


@pytest.fixture
def app(tmp_path):
    app = make_app(tmp_path)
    yield app
    SessionLocal.remove()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    """Test client holding a live session cookie"""
    client.post("/signup", json={"username": "registrar", "password": "secret123"})
    response = client.post("/login", data={"username": "registrar", "password": "secret123"})
    assert response.status_code == 302
    return client


@pytest.fixture
def register(auth_client):
    def _register(**overrides):
        response = auth_client.post(
            "/student/register",
            data=student_form(**overrides),
            content_type="multipart/form-data",
        )
        assert response.status_code == 200, response.get_data(as_text=True)
        return response

    return _register
