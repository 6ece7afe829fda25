# permissions.py
"""
Authentication gates for views.

- view_login_required  — HTML-only: text clients pass unchecked.
- api_login_required   — API-only: browsers pass unchecked.
- login_required_any   — both surfaces require a session.

Failure never raises: HTML gets a flash + 303 redirect to "/",
text gets 401 "Unauthorize".
"""

from functools import wraps

from flask import flash, redirect, url_for
from flask_login import current_user

from utils import text_response, wants_html

AUTH_REQUIRED_MESSAGE = "Authorization required"
UNAUTHORIZED_BODY = "Unauthorize"


def is_authenticated() -> bool:
    return bool(current_user and current_user.is_authenticated)


def deny_access(message: str = AUTH_REQUIRED_MESSAGE):
    """Redirect home with a flash for browsers, 401 for API clients."""
    if wants_html():
        flash(message, "error")
        return redirect(url_for("ui.home"), code=303)
    return text_response(UNAUTHORIZED_BODY, 401)


def view_login_required(view_func):
    @wraps(view_func)
    def wrapped(*args, **kwargs):
        if not wants_html() or is_authenticated():
            return view_func(*args, **kwargs)
        return deny_access()

    return wrapped


def api_login_required(view_func):
    @wraps(view_func)
    def wrapped(*args, **kwargs):
        if wants_html() or is_authenticated():
            return view_func(*args, **kwargs)
        return text_response(UNAUTHORIZED_BODY, 401)

    return wrapped


def login_required_any(view_func):
    @wraps(view_func)
    def wrapped(*args, **kwargs):
        if is_authenticated():
            return view_func(*args, **kwargs)
        return deny_access()

    return wrapped
