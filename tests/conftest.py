"""
Pytest configuration for CampusVoice tests.

Each test gets a fresh in-memory SQLite database and a fake identity
provider; the real users service is never contacted.
"""

import os
import tempfile

# Keep the module-level engine away from the working directory - must be set before any imports
_test_data_dir = tempfile.mkdtemp(prefix="campusvoice_test_")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_test_data_dir}/test.db")

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from campusvoice.core.config import SESSION_COOKIE_NAME
from campusvoice.core.database import get_session
from campusvoice.core.errors import ValidationError
from campusvoice.main import app
from campusvoice.models.complaints import Complaint  # noqa: F401
from campusvoice.models.user import AuthUser
from campusvoice.services.identity import IdentityProvider, get_identity_provider

VALID_TOKEN = "valid-session-token"
VALID_CODE = "good-oauth-code"


class FakeIdentityProvider(IdentityProvider):
    def __init__(self):
        self.sessions: Dict[str, AuthUser] = {
            VALID_TOKEN: AuthUser(id="admin-1", email="admin@campus.edu", name="Campus Admin"),
        }
        self.deleted: List[str] = []

    def get_oauth_redirect_url(self, provider: str) -> str:
        return f"https://accounts.example.com/oauth/{provider}?state=test"

    def exchange_code(self, code: str) -> str:
        if code != VALID_CODE:
            raise ValidationError("Invalid authorization code")
        return VALID_TOKEN

    def current_user(self, session_token: str) -> Optional[AuthUser]:
        return self.sessions.get(session_token)

    def delete_session(self, session_token: str) -> None:
        self.deleted.append(session_token)
        self.sessions.pop(session_token, None)


#scope : function < class < module < package < session
@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def client(engine, identity):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_identity_provider] = lambda: identity
    yield TestClient(app, base_url="https://testserver")
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    client.cookies.set(SESSION_COOKIE_NAME, VALID_TOKEN)
    return client


@pytest.fixture
def complaint_payload():
    return {
        "title": "Broken projector",
        "description": "The projector in room 204 flickers constantly.",
        "category": "technology",
        "location": "science-block",
    }
