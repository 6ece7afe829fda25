"""Articles module package."""

from flask import Blueprint

bp = Blueprint("articles", __name__, url_prefix="/articles")

from . import models  # noqa: E402  pylint: disable=wrong-import-position
from . import store  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "models", "store", "routes"]
