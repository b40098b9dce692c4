import pytest

EXPECTED_CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, POST, PUT, DELETE, OPTIONS, PATCH",
    "access-control-allow-headers": "Content-Type, Authorization, X-Requested-With",
    "access-control-expose-headers": "Content-Type, Authorization",
}


def assert_cors_headers(response):
    for name, value in EXPECTED_CORS.items():
        assert response.headers.get(name) == value, name


@pytest.mark.parametrize("path", ["/health", "/api/auth/login", "/api/sweets", "/api/sweets/42", "/no/such/path"])
def test_options_short_circuits_with_204(client, path):
    response = client.options(path)
    assert response.status_code == 204
    assert response.content == b""
    assert_cors_headers(response)


def test_browser_preflight_is_answered_before_cors_library(client):
    """A real preflight (Origin + request method) still gets our 204."""
    response = client.options(
        "/api/sweets",
        headers={
            "Origin": "http://shop.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 204
    assert response.content == b""
    assert_cors_headers(response)


def test_get_responses_carry_cors_headers(client):
    assert_cors_headers(client.get("/health"))
    assert_cors_headers(client.get("/api/sweets"))


def test_cross_origin_request_keeps_wildcard_origin(client):
    response = client.get("/api/sweets", headers={"Origin": "http://shop.example"})
    assert response.status_code == 200
    assert_cors_headers(response)


def test_error_responses_carry_cors_headers(client):
    not_found = client.get("/api/sweets/999999")
    assert not_found.status_code == 404
    assert_cors_headers(not_found)

    unknown = client.get("/no/such/path")
    assert unknown.status_code == 404
    assert unknown.json() == {"status": "error", "message": "Not Found"}
    assert_cors_headers(unknown)

    invalid = client.post("/api/sweets", json={"name": ""})
    assert invalid.status_code == 422
    assert_cors_headers(invalid)
