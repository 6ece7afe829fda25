"""Request helpers: content negotiation, flash handling, payloads and id checks."""

import enum
import re
from functools import wraps
from typing import Mapping, Optional, Tuple

from flask import abort, g, get_flashed_messages, make_response, request

BROWSER_SIGNATURE = re.compile(r"(mozilla|chrome|safari|edg|firefox|opera)", re.IGNORECASE)
# ASCII digits only, bounded so int() never hits the str-to-int digit limit
RECORD_ID = re.compile(r"[0-9]{1,18}")

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


class ResponseMode(enum.Enum):
    HTML = "html"
    PLAIN_TEXT = "text"

    @property
    def content_type(self) -> str:
        return HTML_CONTENT_TYPE if self is ResponseMode.HTML else TEXT_CONTENT_TYPE


def negotiate(accept: Optional[str], user_agent: Optional[str]) -> ResponseMode:
    """Pick the representation for a request from its Accept and User-Agent headers.

    An explicit ``text/html`` in Accept wins; otherwise a browser-looking
    User-Agent means HTML; everything else (curl, scripts, tests) gets text.
    """
    if "text/html" in (accept or "").lower():
        return ResponseMode.HTML
    if BROWSER_SIGNATURE.search(user_agent or ""):
        return ResponseMode.HTML
    return ResponseMode.PLAIN_TEXT


def response_mode() -> ResponseMode:
    mode = g.get("response_mode")
    if mode is None:
        mode = g.response_mode = negotiate(request.headers.get("Accept"), request.headers.get("User-Agent"))
    return mode


def wants_html() -> bool:
    return response_mode() is ResponseMode.HTML


def text_response(body: str, status: int = 200):
    response = make_response(body, status)
    response.headers["Content-Type"] = TEXT_CONTENT_TYPE
    return response


def no_content():
    return make_response("", 204)


def pop_flash() -> Optional[Tuple[str, str]]:
    """Consume pending flash messages and return the latest ``(category, text)``."""
    messages = get_flashed_messages(with_categories=True)
    return messages[-1] if messages else None


def flash_text() -> Optional[str]:
    message = pop_flash()
    return message[1] if message else None


def request_payload() -> Mapping:
    """Form or JSON body of the current request.

    A malformed JSON body raises ``BadRequest`` (400) from Flask itself.
    """
    if request.is_json:
        data = request.get_json()
        return data if isinstance(data, Mapping) else {}
    return request.form


def is_record_id(raw) -> bool:
    return raw is not None and RECORD_ID.fullmatch(str(raw)) is not None


def validate_id_param(param: str):
    """Reject non-numeric ``param`` path segments with 404.

    The segment is passed on unchanged so responses can echo it as sent;
    views convert it with ``int()`` themselves.
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapped(*args, **kwargs):
            raw = kwargs.get(param)
            if not is_record_id(raw):
                abort(404)
            return view_func(*args, **kwargs)

        return wrapped

    return decorator


def delete_response(description: str, delete_mode: str):
    if delete_mode == "text":
        return text_response(description, 200)
    return no_content()
