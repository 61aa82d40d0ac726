# File: tests/conftest.py

"""
Shared fixtures: an in-memory SQLite database, a throwaway media root and
a TestClient wired to both.
"""

import os
import tempfile
from io import BytesIO

# Settings are read at import time, so configure them before importing app.*
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("MEDIA_ROOT", tempfile.mkdtemp(prefix="portal-media-"))
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi import UploadFile
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db, get_upload_service
from app.db.init_db import init_db
from app.main import app
from app.schemas.user import UserCreate
from app.services.upload_service import UploadService
from app.services.user_service import UserService

DEFAULT_PASSWORD = "correct-horse-battery"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def uploads(tmp_path):
    return UploadService(tmp_path / "media")


@pytest.fixture
def user_service(db, uploads):
    return UserService(db, uploads)


@pytest.fixture
def make_user(user_service):
    def _make(
        name: str = "Ada Lovelace",
        email: str = "ada@example.com",
        password: str = DEFAULT_PASSWORD,
        phone: str | None = None,
    ):
        return user_service.create_user(
            UserCreate(name=name, email=email, password=password, phone=phone)
        )

    return _make


@pytest.fixture
def image_bytes():
    def _image(size=(800, 600), color=(200, 40, 40), fmt="PNG") -> bytes:
        buf = BytesIO()
        Image.new("RGB", size, color).save(buf, format=fmt)
        return buf.getvalue()

    return _image


@pytest.fixture
def upload_file(image_bytes):
    def _upload(data: bytes | None = None, filename: str = "avatar.png") -> UploadFile:
        payload = image_bytes() if data is None else data
        return UploadFile(file=BytesIO(payload), filename=filename)

    return _upload


@pytest.fixture
def client(session_factory, uploads):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_upload_service] = lambda: uploads
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    def _headers(email: str = "ada@example.com", password: str = DEFAULT_PASSWORD) -> dict:
        resp = client.post("/api/v1/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _headers


@pytest.fixture
def default_password() -> str:
    return DEFAULT_PASSWORD
