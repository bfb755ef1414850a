"""
Shared fixtures: in-memory SQLite, field ciphers, users and an API client.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from journal.api.dependencies import get_field_cipher
from journal.db.base import Base
from journal.db.session import build_engine, get_db
from journal.main import app
from journal.models.user import User
from journal.services.confidentiality import FieldCipher

import journal.models  # noqa: F401  (register all tables)

TEST_KEY = bytes(range(32))


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def aes_key():
    return TEST_KEY


@pytest.fixture
def cipher(aes_key):
    return FieldCipher(aes_key)


@pytest.fixture
def plain_cipher():
    """Policy with no key configured."""
    return FieldCipher(None)


@pytest.fixture
def user(db_session):
    user = User(username="alice", hashed_password="not-a-real-hash")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session):
    user = User(username="bob", hashed_password="not-a-real-hash")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def client(db_session, cipher, tmp_path, monkeypatch):
    """TestClient bound to the test session and a keyed field cipher."""
    from journal.core.config import settings
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_field_cipher] = lambda: cipher

    # No context manager: the lifespan would create tables in the configured database
    yield TestClient(app)

    app.dependency_overrides.clear()


def register_and_login(client, username="alice", password="alicepassword123"):
    """Register a user and return bearer headers for it."""
    r = client.post("/api/auth/register", json={"username": username, "password": password})
    assert r.status_code == 201, r.text
    r = client.post("/api/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return register_and_login(client)


@pytest.fixture
def file_sessionmaker(tmp_path):
    """Session factory over a file database, for tests that use several connections."""
    engine = build_engine(f"sqlite:///{tmp_path / 'journal.db'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def login_as(client):
    """Register and log in another user, returning bearer headers."""
    return lambda username, password: register_and_login(client, username, password)
