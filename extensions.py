from flask import current_app
from flask_login import LoginManager

# Extensions are created unbound and attached to the app in create_app()

# Session identity (serialize/deserialize of AuthAccount)
login_manager = LoginManager()


def service(name: str):
    """Return a per-application service registered by ``create_app``.

    Known names: ``identity_store``, ``users``, ``articles``,
    ``article_documents`` and ``layout_renderer``.
    """
    return current_app.extensions[name]
