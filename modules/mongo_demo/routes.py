from flask import current_app

from extensions import service
from modules.articles.store import DocumentStoreUnavailable
from rendering import render_page
from utils import text_response, wants_html

from . import bp


def _as_lines(docs) -> str:
    if not docs:
        return "No documents."
    return "\n".join(f"#{doc.id}: {doc.title or '(untitled)'}" for doc in docs)


@bp.route("/articles")
def articles():
    repository = service("article_documents")
    try:
        docs = repository.list_recent()
    except DocumentStoreUnavailable as exc:
        if repository.configured:
            current_app.logger.warning("mongo demo read failed: %s", exc)
            info = "Could not read from the database."
        else:
            info = "No connection to MongoDB or MONGODB_URI is not set."
        if not wants_html():
            return text_response(f"Mongo articles route ({info})")
        return render_page("mongo_articles.html", title="Mongo Articles", docs=[], info=info)

    if not wants_html():
        return text_response(_as_lines(docs))
    return render_page("mongo_articles.html", title="Mongo Articles", docs=docs, info=None)
