"""Home page, theme preference, protected page and global error handling."""


def test_root_text(client) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "Get root route"


def test_root_html_consumes_flash(client, html_headers) -> None:
    with client.session_transaction() as session:
        session["_flashes"] = [("success", "Hello once")]

    first = client.get("/", headers=html_headers)
    second = client.get("/", headers=html_headers)

    assert "Hello once" in first.get_data(as_text=True)
    assert "Hello once" not in second.get_data(as_text=True)


def test_favicon_is_empty(client) -> None:
    assert client.get("/favicon.ico").status_code == 204


def test_theme_saved_text(client) -> None:
    response = client.post("/preferences/theme", data={"theme": "dark"})

    assert response.status_code == 200
    assert response.get_data(as_text=True) == "Theme saved"
    cookie = next(h for h in response.headers.getlist("Set-Cookie") if h.startswith("theme="))
    assert cookie.startswith("theme=dark")
    assert "HttpOnly" not in cookie
    assert "SameSite=Lax" in cookie


def test_theme_rejects_unknown_value(client) -> None:
    response = client.post("/preferences/theme", data={"theme": "purple"})

    assert response.status_code == 400
    assert not any(h.startswith("theme=") for h in response.headers.getlist("Set-Cookie"))


def test_theme_html_redirects_back(client, html_headers) -> None:
    headers = dict(html_headers, Referer="http://localhost/users")
    response = client.post("/preferences/theme", data={"theme": " AUTO "}, headers=headers)

    assert response.status_code == 303
    assert response.headers["Location"].endswith("/users")
    assert any(h.startswith("theme=auto") for h in response.headers.getlist("Set-Cookie"))


def test_theme_cookie_reaches_pages(client, html_headers) -> None:
    client.post("/preferences/theme", data={"theme": "dark"})
    body = client.get("/", headers=html_headers).get_data(as_text=True)
    assert 'data-theme="dark"' in body


def test_protected_text_requires_session(client) -> None:
    response = client.get("/protected")
    assert response.status_code == 401
    assert response.get_data(as_text=True) == "Unauthorize"


def test_protected_html_redirects_with_flash(client, html_headers) -> None:
    response = client.get("/protected", headers=html_headers)
    assert response.status_code == 303
    assert response.headers["Location"].endswith("/")

    home = client.get("/", headers=html_headers)
    assert "Authorization required" in home.get_data(as_text=True)


def test_protected_with_session(client, html_headers, logged_in) -> None:
    text = client.get("/protected")
    assert text.status_code == 200
    assert text.get_data(as_text=True) == "Protected content for admin@example.com"

    html = client.get("/protected", headers=html_headers)
    assert html.status_code == 200
    assert "Welcome, admin@example.com!" in html.get_data(as_text=True)


def test_unknown_route_not_found(client, html_headers) -> None:
    text = client.get("/nope")
    assert text.status_code == 404
    assert text.get_data(as_text=True) == "Not Found"

    html = client.get("/nope", headers=html_headers)
    assert html.status_code == 404
    assert "<h1>Not Found</h1>" in html.get_data(as_text=True)


def test_unexpected_error_is_generic_500(app, client) -> None:
    @app.route("/boom")
    def boom():
        raise RuntimeError("secret internals")

    response = client.get("/boom")

    assert response.status_code == 500
    assert response.get_data(as_text=True) == "Internal Server Error"


def test_malformed_json_hits_gate_first(client) -> None:
    response = client.post("/users", data="{not json", content_type="application/json")
    assert response.status_code == 401


def test_malformed_json_with_session(client, logged_in) -> None:
    response = client.post("/users", data="{not json", content_type="application/json")
    assert response.status_code == 400
    assert response.get_data(as_text=True) == "Bad Request"


def test_method_not_allowed_keeps_allow_header(client) -> None:
    response = client.patch("/users")

    assert response.status_code == 405
    assert response.get_data(as_text=True) == "Method Not Allowed"
    allowed = {method.strip() for method in response.headers["Allow"].split(",")}
    assert {"GET", "POST"} <= allowed
    assert response.headers["Content-Type"] == "text/plain; charset=utf-8"
