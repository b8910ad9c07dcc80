"""Response builder tests."""

from redirector.responses import default_redirect, not_found, permanent_redirect, service_unavailable


def test_not_found() -> None:
    response = not_found()
    assert response.status_code == 404
    assert response.body == b"404 Not Found"


def test_service_unavailable_has_empty_body() -> None:
    response = service_unavailable()
    assert response.status_code == 503
    assert response.body == b""
    assert "location" not in response.headers


def test_default_redirect_is_temporary() -> None:
    response = default_redirect("http://127.0.0.1:5000")
    assert response.status_code == 307
    assert response.headers["location"] == "http://127.0.0.1:5000"


def test_permanent_redirect_is_301() -> None:
    response = permanent_redirect("https://target.example/page")
    assert response.status_code == 301
    assert response.headers["location"] == "https://target.example/page"


def test_location_is_not_quoted() -> None:
    response = permanent_redirect("https://target.example/a b")
    assert (b"location", b"https://target.example/a b") in response.raw_headers


def test_builders_return_fresh_responses() -> None:
    first = default_redirect("http://a.example")
    second = default_redirect("http://a.example")
    assert first is not second
    assert first.raw_headers == second.raw_headers
