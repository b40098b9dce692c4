"""
Process entry point (`sweetshop-api` console script).

Binds uvicorn on HOST:PORT unless we are under a test runner or a
serverless host, in which case the app is only exported (see app.main).
"""
import logging
import os
from typing import Mapping

import uvicorn

from app.config import APP_ENV, HOST, PORT, SERVERLESS_FLAGS
from app.main import app

logger = logging.getLogger(__name__)


def should_listen(environ: Mapping[str, str] = os.environ, app_env: str = APP_ENV) -> bool:
    """False for test runs and serverless platforms, True otherwise."""
    if app_env == "test" or environ.get("PYTEST_CURRENT_TEST"):
        return False
    return not any(environ.get(flag) for flag in SERVERLESS_FLAGS)


def main() -> None:
    if not should_listen():
        logger.info("Not binding a socket (env=%s); the app is exported for in-process use", APP_ENV)
        return
    logger.info("Server is running on port %s", PORT)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
