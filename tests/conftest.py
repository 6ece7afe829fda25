# tests/conftest.py
import os
import sys

import pytest

# чтобы import create_app работал при запуске из корня
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app import create_app
from modules.articles.store import ArticleDocumentRepository
from fakes import FakeCollection, FakeMongoClient

HTML = {"Accept": "text/html,application/xhtml+xml"}


@pytest.fixture()
def app():
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "MONGODB_URI": "",          # store disabled unless a test wires a fake one
        "DELETE_MODE": "204",
        "SESSION_COOKIE_SECURE": False,
    })
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def html_headers():
    return dict(HTML)


@pytest.fixture()
def mongo_collection(app):
    """Wire a fake MongoDB collection behind the article document repository."""
    collection = FakeCollection()
    app.extensions["article_documents"] = ArticleDocumentRepository(
        "mongodb://localhost:27017/test",
        client_factory=lambda uri, **kwargs: FakeMongoClient(collection),
    )
    return collection


@pytest.fixture()
def account(app):
    return app.extensions["identity_store"].register("admin@example.com", "secret", "admin")


def authenticate(client, account_id: str) -> None:
    with client.session_transaction() as session:
        session["_user_id"] = account_id
        session["_fresh"] = True


@pytest.fixture()
def logged_in(client, account):
    authenticate(client, account.id)
    return account
