"""Fragment + layout rendering for the article pages.

Page templates under ``templates/`` go through Flask's ``render_template``.
Article views under ``views/`` use their own Jinja2 environment: the view
is rendered to a fragment first and then wrapped in ``layout.html``.
"""

import os

from flask import current_app, g, render_template
from flask_login import current_user
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

VIEWS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "views")


class LayoutRenderer:
    def __init__(self, views_dir: str = VIEWS_DIR, layout: str = "layout.html") -> None:
        self.layout = layout
        self.env = Environment(
            loader=FileSystemLoader(views_dir),
            autoescape=select_autoescape(["html"]),
        )

    def render_fragment(self, template: str, **context) -> str:
        return self.env.get_template(template).render(**context)

    def render(self, template: str, title: str, msg=None, **context) -> str:
        body = self.render_fragment(template, title=title, msg=msg, **context)
        return self.env.get_template(self.layout).render(
            title=title,
            msg=msg,
            body=Markup(body),
            **_shared_context(),
        )


def _shared_context() -> dict:
    return {
        "theme": g.get("theme", "light"),
        "current_user": current_user if current_user and current_user.is_authenticated else None,
    }


def render_page(template: str, **context) -> str:
    return render_template(template, **context)


def render_layout(template: str, title: str, msg=None, **context) -> str:
    return current_app.extensions["layout_renderer"].render(template, title=title, msg=msg, **context)
