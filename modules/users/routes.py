"""HTTP routes for the users resource."""

from flask import current_app, flash, redirect, url_for

from extensions import service
from permissions import api_login_required, view_login_required
from rendering import render_page
from utils import (
    delete_response,
    flash_text,
    request_payload,
    text_response,
    validate_id_param,
    wants_html,
)

from . import bp
from .models import validate_user_fields


@bp.route("", methods=["GET"])
@view_login_required
def index():
    if not wants_html():
        return text_response("Get users route")

    users = service("users").list()
    return render_page("users_index.html", title="Users", users=users, msg=flash_text())


@bp.route("", methods=["POST"])
@api_login_required
def create_user():
    payload = request_payload()
    if not validate_user_fields(payload):
        return text_response("Bad Request", 400)

    record = service("users").create(payload)
    current_app.logger.info("created user %s (%s)", record.id, record.name)

    if wants_html():
        flash("Post users route", "success")
        return redirect(url_for("users.index"), code=303)
    return text_response("Post users route", 201)


@bp.route("/<user_id>", methods=["GET"])
@view_login_required
@validate_id_param("user_id")
def show_user(user_id: str):
    if not wants_html():
        return text_response(f"Get user by Id route: {user_id}")

    record_id = int(user_id)
    user = service("users").get(record_id)
    if user is None:
        return render_page("users_not_found.html", title="User not found", user_id=record_id), 404
    return render_page("users_show.html", title=f"User {record_id}", user=user)


@bp.route("/<user_id>", methods=["PUT"])
@api_login_required
@validate_id_param("user_id")
def replace_user(user_id: str):
    payload = request_payload()
    if not validate_user_fields(payload):
        return text_response("Bad Request", 400)

    service("users").replace(int(user_id), payload)
    return text_response(f"Put user by Id route: {user_id}")


@bp.route("/<user_id>", methods=["DELETE"])
@api_login_required
@validate_id_param("user_id")
def delete_user(user_id: str):
    service("users").delete(int(user_id))
    return delete_response(f"Delete user by Id route: {user_id}", current_app.config["DELETE_MODE"])
