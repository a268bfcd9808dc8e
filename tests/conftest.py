import os

# Must be set before mathwizard.config is imported
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SMTP_HOST"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mathwizard.app import app
from mathwizard.core.database import get_db
from mathwizard.core.dependencies import get_admin_credentials, get_mailer
from mathwizard.models.base import Base
from mathwizard.schemas.user import AdminCredentials
from mathwizard.utils.account_manager import AccountManager

ADMIN = AdminCredentials(email="admin@mathwizard.test", password="admin-secret")


class RecordingMailer:
    """Mailer stand-in that keeps verification emails in memory."""

    def __init__(self):
        self.sent = []

    def send_verification_email(self, to_email, name, token, code):
        self.sent.append({"to": to_email, "name": name, "token": token, "code": code})
        return True


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def accounts(db):
    return AccountManager(db, ADMIN)


@pytest.fixture
def make_parent(accounts):
    """Create a verified parent account."""

    def _make(email="pat@example.com", password="secret123", max_children=2, name="Pat"):
        parent = accounts.register_parent(name, email, password, max_children)
        accounts.verify_by_token(parent.verification_token)
        return parent

    return _make


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def client(session_factory, mailer):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_admin_credentials] = lambda: ADMIN
    app.dependency_overrides[get_mailer] = lambda: mailer
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    resp = client.post(
        "/api/login", json={"email": ADMIN.email, "password": ADMIN.password}
    )
    return {"Authorization": f"Bearer {resp.json()['token']}"}
