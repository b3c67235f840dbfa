"""
Shared fixtures for the API test suite.

The application reads its settings at import time, so the environment is
prepared before anything from ``app`` or ``main`` is imported: a throwaway
sqlite file, a temporary upload directory, an in-memory rate-limit store and
no OTP cleanup scheduler.
"""

import os
import shutil
import tempfile

import pytest

TEST_ROOT = tempfile.mkdtemp(prefix="cms-tests-")

os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(TEST_ROOT, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(TEST_ROOT, "uploads")
os.environ["REDIS_URL"] = "memory://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["OTP_CLEANUP_ENABLED"] = "false"
os.environ["MAIL_USERNAME"] = ""
os.environ["MAIL_PASSWORD"] = ""
os.environ["APP_URL"] = "http://testserver"

from fastapi.testclient import TestClient  # noqa: E402

import app.models  # noqa: E402,F401
from app.core.database import Base, SessionLocal, engine, get_db  # noqa: E402
from main import app  # noqa: E402


def pytest_sessionfinish(session, exitstatus):
    engine.dispose()
    shutil.rmtree(TEST_ROOT, ignore_errors=True)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Test client sharing the test session; the lifespan hooks are not run"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def session_client(db_session):
    """Test client using the application's own get_db (rolled back on errors)"""
    app.dependency_overrides.clear()
    yield TestClient(app)


@pytest.fixture
def sent_otps(monkeypatch):
    """Capture outgoing OTP emails instead of talking to SMTP"""
    outbox = []

    async def fake_send(email, otp, purpose="login"):
        outbox.append({"email": email, "otp": otp, "purpose": purpose})
        return True

    monkeypatch.setattr("app.services.auth.send_otp_email", fake_send)
    return outbox


# ==================== Data helpers ====================


@pytest.fixture
def category(client):
    response = client.post(
        "/api/categories",
        json={"name": "Network Security", "description": "Protecting networks"},
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def subcategory(client, category):
    response = client.post(
        "/api/subcategories",
        json={"name": "Firewalls", "categoryId": category["id"]},
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def make_topic(client):
    """Factory posting a topic; keyword arguments override the payload"""

    def _make(**overrides):
        payload = {"title": "Intro to Firewalls", "description": "Basics"}
        payload.update(overrides)
        response = client.post("/api/topics", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make
