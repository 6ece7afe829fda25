"""HTTP routes for articles.

Browsers read and write MongoDB documents rendered through the layout
pipeline; API clients work on the in-memory ``ArticleCollection``.
"""

from flask import current_app, flash, redirect, url_for

from extensions import service
from permissions import api_login_required, view_login_required
from rendering import render_layout
from utils import (
    delete_response,
    flash_text,
    request_payload,
    text_response,
    validate_id_param,
    wants_html,
)

from . import bp
from .models import validate_article_fields
from .store import DocumentStoreUnavailable

NO_STORE_MESSAGE = "No connection to MongoDB or MONGODB_URI is not set."


@bp.route("", methods=["GET"])
@view_login_required
def index():
    if not wants_html():
        return text_response("Get articles route")

    msg = flash_text()
    try:
        articles = service("article_documents").list_recent()
    except DocumentStoreUnavailable:
        articles = []
        msg = msg or NO_STORE_MESSAGE
    return render_layout("articles_index.html", title="Articles", msg=msg, articles=articles)


@bp.route("", methods=["POST"])
@api_login_required
def create_article():
    payload = request_payload()
    if not validate_article_fields(payload):
        return text_response("Bad Request", 400)

    title = payload["title"].strip()
    if not wants_html():
        record = service("articles").create(payload)
        current_app.logger.info("created in-memory article %s", record.id)
        return text_response("Post articles route", 201)

    body = payload.get("body")
    body = body.strip() if isinstance(body, str) else ""
    try:
        doc = service("article_documents").insert(title, body)
    except DocumentStoreUnavailable:
        flash("No connection to MongoDB.", "error")
        return redirect(url_for("articles.index"), code=303)

    current_app.logger.info("stored article document %s", doc.id)
    flash("Post articles route", "success")
    return redirect(url_for("articles.index"), code=303)


@bp.route("/<article_id>", methods=["GET"])
@view_login_required
def show_article(article_id: str):
    if not wants_html():
        return text_response(f"Get article by Id route: {article_id}")

    try:
        article = service("article_documents").find_by_id(article_id)
    except DocumentStoreUnavailable:
        article = None

    if article is None:
        html = render_layout("articles_not_found.html", title="Article not found", article_id=article_id)
        return html, 404
    return render_layout("articles_show.html", title="Article", article=article)


@bp.route("/<article_id>", methods=["PUT"])
@api_login_required
@validate_id_param("article_id")
def replace_article(article_id: str):
    payload = request_payload()
    if not validate_article_fields(payload):
        return text_response("Bad Request", 400)

    service("articles").replace(int(article_id), payload)
    return text_response(f"Put article by Id route: {article_id}")


@bp.route("/<article_id>", methods=["DELETE"])
@api_login_required
@validate_id_param("article_id")
def delete_article(article_id: str):
    service("articles").delete(int(article_id))
    return delete_response(f"Delete article by Id route: {article_id}", current_app.config["DELETE_MODE"])
