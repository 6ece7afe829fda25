"""Registration, login and logout for both browsers and API clients."""

from flask import abort, current_app, flash, redirect, session, url_for
from flask_login import login_user, logout_user

from extensions import login_manager, service
from models import InvalidCredentials, RegistrationError
from rendering import render_page
from utils import flash_text, no_content, request_payload, text_response, wants_html

from . import bp


@login_manager.user_loader
def load_account(account_id: str):
    """Resolve the session's account id back into an ``AuthAccount``."""
    return service("identity_store").deserialize(account_id)


@bp.route("/login", methods=["GET"])
def login_form():
    if not wants_html():
        abort(404)
    return render_page("auth_login.html", title="Login", msg=flash_text())


@bp.route("/register", methods=["GET"])
def register_form():
    if not wants_html():
        abort(404)
    return render_page("auth_register.html", title="Register", msg=flash_text())


@bp.route("/register", methods=["POST"])
def register():
    payload = request_payload()
    try:
        credential = service("identity_store").register(
            payload.get("email"),
            payload.get("password"),
            payload.get("role") or "user",
        )
    except RegistrationError as exc:
        current_app.logger.info("registration rejected: %s", exc)
        return text_response("Bad Request", 400)

    current_app.logger.info("registered %s as %s", credential.email, credential.id)
    if wants_html():
        flash("Registered", "success")
        return redirect(url_for("auth.login_form"), code=303)
    return text_response("Registered", 201)


@bp.route("/login", methods=["POST"])
def login():
    payload = request_payload()
    try:
        account = service("identity_store").authenticate(payload.get("email"), payload.get("password"))
    except InvalidCredentials:
        if wants_html():
            flash("Invalid credentials", "error")
            return redirect(url_for("ui.home"), code=303)
        return text_response("Unauthorize", 401)

    session.permanent = True
    login_user(account)
    if wants_html():
        flash("Logged in", "success")
        return redirect(url_for("ui.home"), code=303)
    return text_response("Logged in")


@bp.route("/logout", methods=["POST"])
def logout():
    logout_user()
    session.clear()
    if wants_html():
        return redirect(url_for("ui.home"), code=303)
    return no_content()
