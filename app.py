import atexit
import itertools
import logging
import time

from flask import Flask, g, request
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

load_dotenv()

from config import Config  # noqa: E402  (load_dotenv needs to run first)
from extensions import login_manager  # noqa: E402  (load_dotenv needs to run first)


def create_app(config_overrides: dict | None = None) -> Flask:
    """Application factory for the course server."""

    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # init extensions
    login_manager.init_app(app)

    # services, one instance per app
    from models import IdentityStore
    from modules.articles.models import ArticleCollection
    from modules.articles.store import ArticleDocumentRepository
    from modules.users.models import UserCollection
    from rendering import LayoutRenderer

    if not app.config.get("MONGODB_URI"):
        app.logger.warning("[mongo] MONGODB_URI is not set. Mongo routes will show empty data.")

    app.extensions["identity_store"] = IdentityStore()
    app.extensions["users"] = UserCollection()
    app.extensions["articles"] = ArticleCollection()
    app.extensions["article_documents"] = ArticleDocumentRepository(
        app.config.get("MONGODB_URI", ""),
        collection_name=app.config["MONGODB_COLLECTION"],
        default_db=app.config["MONGODB_DB"],
        timeout_ms=app.config["MONGODB_TIMEOUT_MS"],
    )
    atexit.register(app.extensions["article_documents"].close)
    app.extensions["layout_renderer"] = LayoutRenderer()

    # blueprints
    from modules.auth import bp as auth_bp
    from modules.users import bp as users_bp
    from modules.articles import bp as articles_bp
    from modules.mongo_demo import bp as mongo_demo_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(articles_bp)
    app.register_blueprint(mongo_demo_bp)

    from ui_routes import ui, THEMES
    app.register_blueprint(ui)  # "/", "/protected", "/preferences/theme"

    _register_request_hooks(app, THEMES)
    _register_error_handlers(app)

    @app.context_processor
    def inject_theme():
        return dict(theme=g.get("theme", "light"))

    return app


def _register_request_hooks(app: Flask, themes) -> None:
    from utils import negotiate

    request_ids = itertools.count(1)

    @app.before_request
    def prepare_request():
        g.request_id = f"{next(request_ids):06d}"
        g.started_at = time.perf_counter()
        g.response_mode = negotiate(request.headers.get("Accept"), request.headers.get("User-Agent"))
        theme = request.cookies.get(app.config["THEME_COOKIE_NAME"], "light")
        g.theme = theme if theme in themes else "light"

    @app.after_request
    def finish_request(response):
        mode = g.get("response_mode")
        is_redirect = 300 <= response.status_code < 400
        if mode is not None and response.status_code != 204 and not is_redirect:
            response.headers["Content-Type"] = mode.content_type

        started = g.get("started_at")
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0
        app.logger.info(
            "[%s] %s %s -> %s (%dms)",
            g.get("request_id", "------"),
            request.method,
            request.full_path.rstrip("?"),
            response.status_code,
            elapsed_ms,
        )
        return response


def _register_error_handlers(app: Flask) -> None:
    from rendering import render_page
    from utils import text_response, wants_html

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        if exc.code is None:
            return exc
        if exc.code == 404 and wants_html():
            return render_page("not_found.html", title="Not Found"), 404
        response = text_response(exc.name, exc.code)
        for name, value in exc.get_headers():
            if name.lower() != "content-type":
                response.headers[name] = value
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        app.logger.exception("[%s] unhandled error: %s", g.get("request_id", "------"), exc)
        return text_response("Internal Server Error", 500)


if __name__ == "__main__":
    logging.basicConfig(level=Config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    app.logger.info("[boot] server listening on http://%s:%s", app.config["HOST"], app.config["PORT"])
    app.run(host=app.config["HOST"], port=app.config["PORT"])
