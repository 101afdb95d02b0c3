# utils/auth.py
from functools import wraps

from flask import current_app, g, redirect, request, url_for


def get_session_store():
    return current_app.extensions["session_store"]


def current_session_token():
    return request.cookies.get(current_app.config["SESSION_COOKIE_NAME"])


def login_required(view):
    """Redirect to the login page unless the request carries a live session."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        user = get_session_store().resolve(current_session_token())
        if user is None:
            current_app.logger.debug("Unauthenticated request to %s", request.path)
            return redirect(url_for("views.login_page"))
        g.current_user = user
        return view(*args, **kwargs)

    return wrapper
