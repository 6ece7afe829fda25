# ui_routes.py — home page, protected page, theme preference
from flask import Blueprint, current_app, redirect, request
from flask_login import current_user

from permissions import login_required_any
from rendering import render_page
from utils import flash_text, no_content, request_payload, text_response, wants_html

ui = Blueprint("ui", __name__)

THEMES = {"light", "dark", "auto"}


@ui.route("/")
def home():
    if not wants_html():
        return text_response("Get root route")
    return render_page("main.html", title="Main", msg=flash_text())


@ui.route("/favicon.ico")
def favicon():
    return no_content()


@ui.route("/protected")
@login_required_any
def protected():
    if not wants_html():
        return text_response(f"Protected content for {current_user.email}")
    return render_page(
        "main.html",
        title="Protected",
        msg=f"Welcome, {current_user.email}! This is a protected page.",
    )


@ui.route("/preferences/theme", methods=["POST"])
def save_theme():
    theme = str(request_payload().get("theme") or "").strip().lower()
    if theme not in THEMES:
        return text_response("Bad Request", 400)

    if wants_html():
        response = redirect(request.referrer or "/", code=303)
    else:
        response = text_response("Theme saved")

    response.set_cookie(
        current_app.config["THEME_COOKIE_NAME"],
        theme,
        max_age=current_app.config["THEME_COOKIE_MAX_AGE"],
        httponly=False,
        samesite="Lax",
    )
    return response
