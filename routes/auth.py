# routes/auth.py
from flask import Blueprint, request, jsonify, current_app, redirect, url_for
from pydantic import ValidationError

from controllers.auth_controller import sign_up, login, logout
from utils.auth import current_session_token
from utils.errors import DuplicateUsername, InvalidCredentials

bp = Blueprint('auth', __name__)


def _read_payload() -> dict:
    # Views post urlencoded forms; API clients post JSON
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


@bp.route("/signup", methods=["POST"])
def signup():
    try:
        sign_up(_read_payload())
    except ValidationError as ve:
        return jsonify({"detail": ve.errors(include_url=False, include_context=False)}), 422
    except DuplicateUsername:
        return "Username already taken", 409
    except Exception:
        current_app.logger.exception("Signup failed")
        return "Error signing up", 500

    return "User registered successfully", 200


@bp.route("/login", methods=["POST"])
def login_submit():
    try:
        token = login(_read_payload())
    except (InvalidCredentials, ValidationError):
        return "Invalid credentials", 401
    except Exception:
        current_app.logger.exception("Login failed")
        return "Error logging in", 500

    response = redirect(url_for("views.index"))
    response.set_cookie(
        current_app.config["SESSION_COOKIE_NAME"],
        token,
        max_age=current_app.config["SESSION_LIFETIME_MINUTES"] * 60,
        httponly=True,
        secure=current_app.config["SESSION_COOKIE_SECURE"],
        samesite="Lax",
    )
    return response


@bp.route("/logout", methods=["GET", "POST"])
def logout_submit():
    try:
        logout(current_session_token())
    except Exception:
        current_app.logger.exception("Logout failed")
        return "Error logging out", 500

    response = redirect(url_for("views.login_page"))
    response.delete_cookie(current_app.config["SESSION_COOKIE_NAME"])
    return response
