import os

# Settings are read at import time, so the environment must be in place first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ENVIRONMENT"] = "development"
os.environ["FRONTEND_ORIGIN"] = "https://yourdomain.com"
os.environ["MAIL_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import models  # noqa: F401
from core.config import settings
from database import get_session
from main import app, create_app


@pytest.fixture()
def client():
    app.state.rate_limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def production_client():
    production_app = create_app(settings.model_copy(update={"ENVIRONMENT": "production"}))
    return TestClient(production_app, follow_redirects=False)


@pytest.fixture()
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture()
def session_client(client, session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    return client
