"""
Sweet Shop API: FastAPI application factory.

`create_app()` only builds the app; it never binds a socket. The module-level
`app` is what test clients, ASGI servers and the serverless entry import.
Whether to listen is decided in `app.server`.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import APP_TITLE, LOADED_ENV_FILES, MAX_BODY_BYTES
from app.core.cors import add_cors_library_middleware, cors_headers_middleware
from app.core.errors import register_exception_handlers
from app.core.limits import BodySizeLimitMiddleware
from app.db.database import close_pool, init_pool
from app.logging_config import configure_logging
from app.routes import auth_routes, health_routes, sweet_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Bring the database up on startup; a failure is logged and /health reports it."""
    try:
        init_pool()
    except Exception as e:
        logger.error("Database initialization failed, continuing without it: %s", e)
    yield
    close_pool()


def create_app() -> FastAPI:
    configure_logging()
    if LOADED_ENV_FILES:
        logger.info("Loaded env from: %s", ", ".join(LOADED_ENV_FILES))

    app = FastAPI(title=APP_TITLE, lifespan=lifespan)

    # Middleware added last runs first: the header stamp wraps everything,
    # including 413s from the body limit.
    add_cors_library_middleware(app)
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=MAX_BODY_BYTES)
    app.middleware("http")(cors_headers_middleware)

    register_exception_handlers(app)

    app.include_router(health_routes.router)
    app.include_router(auth_routes.router, prefix="/api/auth")
    app.include_router(sweet_routes.router, prefix="/api/sweets")
    return app


app = create_app()
