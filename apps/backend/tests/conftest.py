import os
import tempfile
import uuid
from pathlib import Path

import pytest

# Settings are read once at import of app.config, so point them at a
# throwaway SQLite file before anything from `app` is imported.
_TMP_DIR = Path(tempfile.mkdtemp(prefix="sweetshop-tests-"))
os.environ["APP_ENV"] = "test"
os.environ["DB_DRIVER"] = "sqlite"
os.environ["SQLITE_PATH"] = str(_TMP_DIR / "sweetshop-test.db")
os.environ["JWT_SECRET"] = "test-only-secret-that-is-long-enough-for-hs256"

from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402


@pytest.fixture(scope="module")
def client():
    """Test client with the lifespan run, so the SQLite schema exists."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def unique_email():
    return f"user-{uuid.uuid4().hex[:10]}@example.com"


@pytest.fixture
def unique_name():
    return f"Sweet {uuid.uuid4().hex[:8]}"
