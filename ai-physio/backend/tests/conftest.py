from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Callable

import pytest
from fastapi.testclient import TestClient

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

# Settings are read at import time, so the test database and a clean provider config
# have to be in place before anything from the app is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="ai-physio-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR}/ai-physio-test.db"
os.environ["ALLOW_DEMO_USER"] = "false"
for _key in ("MODEL_BASE_URL", "MODEL_API_KEY", "MODEL_NAME"):
    os.environ.pop(_key, None)

from database.session import SessionLocal, engine  # noqa: E402
from main import app  # noqa: E402
from models.base import Base  # noqa: E402
from models.user import User  # noqa: E402
from services.auth_service import create_access_token, hash_password  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    with SessionLocal() as session:
        yield session


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db) -> Callable[[str], User]:
    def _make(email: str) -> User:
        user = User(email=email, name=email.split("@")[0], hashed_password=hash_password("secret-pw"))
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def user(make_user) -> User:
    return make_user("rehab.user@example.com")


@pytest.fixture
def headers_for() -> Callable[[User], dict[str, str]]:
    def _make(u: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(sub=str(u.id), email=u.email)}"}

    return _make


@pytest.fixture
def auth_headers(user, headers_for) -> dict[str, str]:
    return headers_for(user)
