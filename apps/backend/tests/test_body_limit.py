import json
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from app.config import MAX_BODY_BYTES
from app.core.limits import BodySizeLimitMiddleware

MB = 1024 * 1024


def _echo_app(max_bytes: int = MAX_BODY_BYTES) -> FastAPI:
    echo = FastAPI()
    echo.add_middleware(BodySizeLimitMiddleware, max_bytes=max_bytes)

    @echo.post("/echo")
    async def echo_length(request: Request):
        data = await request.json()
        return {"length": len(data["blob"])}

    return echo


def test_limit_is_fifty_megabytes():
    assert MAX_BODY_BYTES == 50 * MB


def test_49mb_json_body_is_accepted():
    blob = "a" * (49 * MB)
    with TestClient(_echo_app()) as client:
        response = client.post(
            "/echo",
            content=json.dumps({"blob": blob}),
            headers={"Content-Type": "application/json"},
        )
    assert response.status_code == 200
    assert response.json() == {"length": 49 * MB}


def test_body_over_limit_is_rejected_by_the_api(client):
    response = client.post(
        "/api/sweets",
        content=b"x" * (50 * MB + 1),
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 413
    assert response.json()["status"] == "error"
    assert response.headers["access-control-allow-origin"] == "*"

    # Still serving afterwards
    assert client.get("/health").status_code == 200


def test_streamed_body_over_limit_is_rejected():
    def chunks():
        for _ in range(8):
            yield b"y" * 512

    with TestClient(_echo_app(max_bytes=1024)) as client:
        response = client.post("/echo", content=chunks(), headers={"Content-Type": "application/json"})
    assert response.status_code == 413
    assert response.json() == {"status": "error", "message": "Request body exceeds 1024 bytes limit"}


def test_large_urlencoded_body_is_accepted(client, unique_name):
    form = urlencode({"name": unique_name, "category": "toffee", "price": "1.5", "pad": "a" * (49 * MB)})
    response = client.post(
        "/api/sweets",
        content=form,
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 201
    assert response.json()["name"] == unique_name
