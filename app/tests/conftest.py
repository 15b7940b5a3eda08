import os
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker

# Must be set BEFORE importing any app modules
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["TESTING"] = "true"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["QUEUE_CONNECTION"] = "sync"
os.environ["LOG_FORMAT"] = "text"

from app.main import app
from app.database import Base
from app.models.post import Post
from app.models.user import User
from app.services.auth_service import create_access_token
from app.services.job_queue import job_queue
import app.database as db_module
import app.dependencies as dependencies_module
import app.jobs.send_favorites_notification as favorites_job_module
import app.commands.import_users as import_users_module
import app.services.notifications as notifications_module


@pytest.fixture(scope="session")
def test_engine():
    return create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # share same in-memory DB across connections
    )


@pytest.fixture()
def db_session(test_engine):
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )
    # Fresh schema per test
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def patch_sessionlocal(monkeypatch, test_engine, db_session):
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )
    monkeypatch.setattr(db_module, "engine", test_engine, raising=False)
    # Every module that opens its own sessions
    for module in (
        db_module,
        dependencies_module,
        favorites_job_module,
        import_users_module,
    ):
        monkeypatch.setattr(module, "SessionLocal", TestingSessionLocal, raising=True)

    monkeypatch.setattr(job_queue, "sync", True)
    app.state.limiter.enabled = False
    yield


@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """Records outgoing mail instead of talking to SMTP."""
    outbox = []

    def _record_send_email(to_email: str, subject: str, body: str):
        outbox.append({"to": to_email, "subject": subject, "body": body})
        return {"sent": True}

    monkeypatch.setattr(notifications_module, "send_email", _record_send_email)
    return outbox


@pytest.fixture()
def client():
    return TestClient(app)


@pytest.fixture()
def make_user(db_session):
    counter = {"n": 0}

    def _make_user(name=None, email=None):
        counter["n"] += 1
        user = User(
            name=name or f"User {counter['n']}",
            email=email or f"user{counter['n']}@example.com",
            password_hash="x",
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_post(db_session, make_user):
    def _make_post(user=None, title="A post", body="Some body."):
        author = user if user is not None else make_user()
        post = Post(title=title, body=body, user_id=author.id)
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


def auth_headers(user):
    token = create_access_token(user.email, user.id, timedelta(minutes=30))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def headers_for():
    return auth_headers
