"""Read-only view of the MongoDB article collection."""

from flask import Blueprint

bp = Blueprint("mongo_demo", __name__, url_prefix="/mongo-demo")

from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "routes"]
