import os
import tempfile
from pathlib import Path

import pytest

_TMP = Path(tempfile.mkdtemp(prefix="pakli-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.pop("OUTAGES_SOURCE", None)
os.environ.pop("OUTAGES_DATA_PATH", None)

from fastapi.testclient import TestClient  # noqa: E402

from pakli.core.ratelimit import limiter  # noqa: E402
from pakli.db.base import Base  # noqa: E402
from pakli.db.session import SessionLocal, engine  # noqa: E402
from pakli.main import app  # noqa: E402
from pakli.models import outage, subscription, user  # noqa: E402,F401

limiter.enabled = False


@pytest.fixture(scope="session", autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_tables():
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def register(client, email="ivan@pakli.bg", district="Младост", **extra):
    body = {
        "name": "Иван Петров",
        "email": email,
        "password": "s3cret-pass",
        "address": "бул. Александър Малинов 1",
        "city": "София",
        "district": district,
    }
    body.update(extra)
    r = client.post("/auth/register", json=body)
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return register(client)
