"""CORS wiring: Starlette's CORSMiddleware plus a header stamp on every response."""
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from app.config import (
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    CORS_ALLOW_ORIGIN,
    CORS_EXPOSE_HEADERS,
)
from app.core.errors import unhandled_exception_handler

CORS_HEADERS = {
    "Access-Control-Allow-Origin": CORS_ALLOW_ORIGIN,
    "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
    "Access-Control-Expose-Headers": ", ".join(CORS_EXPOSE_HEADERS),
}


def add_cors_library_middleware(app: FastAPI) -> None:
    """Register CORSMiddleware with the shop's policy."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[CORS_ALLOW_ORIGIN],
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
        expose_headers=CORS_EXPOSE_HEADERS,
    )


async def cors_headers_middleware(request: Request, call_next):
    """
    Stamp the CORS headers on every response.

    Preflight (any OPTIONS request) is answered here with 204 and no body,
    so it never reaches the routers. Errors nothing else handled become a
    JSON 500 here, so they carry the headers too.
    """
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)

    try:
        response = await call_next(request)
    except Exception as exc:
        response = await unhandled_exception_handler(request, exc)
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response
