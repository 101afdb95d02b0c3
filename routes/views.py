# routes/views.py
from flask import Blueprint, current_app, send_from_directory

from utils.auth import login_required

bp = Blueprint('views', __name__)


def serve_view(name: str):
    return send_from_directory(current_app.config["VIEWS_FOLDER"], name)


@bp.route("/", methods=["GET"])
@login_required
def index():
    return serve_view("index.html")


@bp.route("/login", methods=["GET"])
def login_page():
    return serve_view("login.html")


@bp.route("/signup", methods=["GET"])
def signup_page():
    return serve_view("signup.html")


@bp.route("/student/register", methods=["GET"])
@login_required
def register_page():
    return serve_view("student_registration.html")


@bp.route("/student/retrieve", methods=["GET"])
@login_required
def retrieve_page():
    return serve_view("retrieve_student.html")
