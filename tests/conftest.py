"""
Shared fixtures.

Environment is set before anything from storytime is imported, because the
database engine, the Fernet key and the JWT secret are read at import time.
"""

import os
import sys
import tempfile
from pathlib import Path

from cryptography.fernet import Fernet

_DB_DIR = tempfile.mkdtemp(prefix="storytime-tests-")
os.environ["ENV"] = "production"  # skip .env loading
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_DB_DIR) / 'storytime.db'}"
os.environ["FERNET_SECRET"] = Fernet.generate_key().decode()
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["ADMIN_API_KEY"] = "admin-test-key"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENABLE_SCHEDULER"] = "false"

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient

from storytime.main import app
from storytime.models.database import Base, SessionLocal


@pytest.fixture(autouse=True)
def clean_tables():
    yield
    db = SessionLocal()
    try:
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()
    finally:
        db.close()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def login(client):
    """Signs in a device and returns (uid, auth headers)."""
    def _login(device_id="device-1"):
        resp = client.post("/auth/anonymous-login", json={"device_id": device_id})
        assert resp.status_code == 200
        token = resp.json()["token"]
        return device_id, {"Authorization": f"Bearer {token}"}
    return _login


@pytest.fixture
def admin_headers():
    return {"X-Admin-Key": "admin-test-key"}
