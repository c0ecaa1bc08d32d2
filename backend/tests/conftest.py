"""
Pytest configuration and fixtures for backend tests.
"""

import base64
import json
import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["OPENAI_API_KEY"] = ""

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from shared.infrastructure.db import get_db
from rest_api.models import (
    Base,
    User,
    Menu,
    MenuSection,
    MenuItem,
    ItemIngredient,
    ItemAllergen,
)
from rest_api.services.llm import OpenAIClient, get_llm_client
from rest_api.services.storage import StorageClient, get_storage_client
from shared.security.auth import sign_access_token
from shared.security.password import hash_password


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


# =============================================================================
# Fake upstream services (httpx.MockTransport)
# =============================================================================


class FakeOpenAI:
    """
    Records every request sent to the OpenAI API and answers from
    configurable state.
    """

    BASE_URL = "https://llm.test/v1"

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.chat_reply = "Translated text"
        self.chat_status = 200
        self.image_status = 200
        self.variation_status = 200
        self.download_status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.endswith("/chat/completions"):
            if self.chat_status != 200:
                return httpx.Response(self.chat_status, json={"error": {"message": "boom"}})
            return httpx.Response(
                200, json={"choices": [{"message": {"content": self.chat_reply}}]}
            )
        if path.endswith("/images/generations"):
            if self.image_status != 200:
                return httpx.Response(self.image_status, json={"error": {"message": "boom"}})
            return httpx.Response(200, json={"data": [{"b64_json": base64.b64encode(PNG_BYTES).decode()}]})
        if path.endswith("/images/variations"):
            if self.variation_status != 200:
                return httpx.Response(self.variation_status, json={"error": {"message": "boom"}})
            return httpx.Response(200, json={"data": [{"b64_json": base64.b64encode(PNG_BYTES).decode()}]})
        # Reference image download
        if self.download_status != 200:
            return httpx.Response(self.download_status)
        return httpx.Response(200, content=PNG_BYTES, headers={"Content-Type": "image/png"})

    def client(self, api_key: str = "test-key") -> OpenAIClient:
        return OpenAIClient(
            base_url=self.BASE_URL,
            api_key=api_key,
            transport=httpx.MockTransport(self.handler),
        )

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    @property
    def chat_calls(self) -> list[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.url.path.endswith("/chat/completions")
        ]


class FakeStorage:
    """In-memory object store behind the storage REST API."""

    BASE_URL = "https://storage.test"

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.removed: list[str] = []
        self.upload_status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        prefix = "/storage/v1/object/"
        key = request.url.path[len(prefix):]
        if request.method == "POST":
            if self.upload_status != 200:
                return httpx.Response(self.upload_status, json={"message": "rejected"})
            self.objects[key] = request.content
            return httpx.Response(200, json={"Key": key})
        if request.method == "DELETE":
            bucket = key
            for path in json.loads(request.content)["prefixes"]:
                self.removed.append(f"{bucket}/{path}")
                self.objects.pop(f"{bucket}/{path}", None)
            return httpx.Response(200, json=[])
        return httpx.Response(405)

    def client(self) -> StorageClient:
        return StorageClient(
            base_url=self.BASE_URL,
            service_key="service-key",
            transport=httpx.MockTransport(self.handler),
        )


# =============================================================================
# Application fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_llm():
    return FakeOpenAI()


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def llm_client(fake_llm):
    return fake_llm.client()


@pytest.fixture
def storage_client(fake_storage):
    return fake_storage.client()


@pytest.fixture(scope="function")
def client(db_session, llm_client, storage_client):
    """
    Test client with the database session and both upstream clients
    overridden.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm_client] = lambda: llm_client
    app.dependency_overrides[get_storage_client] = lambda: storage_client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Owners
# =============================================================================


def _create_user(db_session, email: str, password: str) -> User:
    user = User(email=email, password=hash_password(password), full_name="Test Owner")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def owner(db_session):
    return _create_user(db_session, "owner@test.com", "testpass123")


@pytest.fixture
def auth_headers(client, owner):
    """Get authentication headers for API calls."""
    response = client.post(
        "/api/auth/login",
        json={"email": "owner@test.com", "password": "testpass123"},
    )
    assert response.status_code == 200, f"Login failed: {response.json()}"
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_owner(db_session):
    return _create_user(db_session, "other@test.com", "otherpass123")


@pytest.fixture
def other_headers(other_owner):
    token = sign_access_token(other_owner.id, other_owner.email)
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Menu content
# =============================================================================


@pytest.fixture
def menu_tree(db_session, owner):
    """
    Menu "Cena" with two sections:
        Antipasti: Bruschetta (Pane, Pomodoro; glutine)
        Dolci:     Tiramisù
    """
    menu = Menu(owner_id=owner.id, name="Cena", description="Menu della sera")
    db_session.add(menu)
    db_session.flush()

    antipasti = MenuSection(
        menu_id=menu.id, name="Antipasti", description="Per iniziare", display_order=0
    )
    dolci = MenuSection(menu_id=menu.id, name="Dolci", display_order=1)
    db_session.add_all([antipasti, dolci])
    db_session.flush()

    bruschetta = MenuItem(
        section_id=antipasti.id,
        name="Bruschetta",
        description="Pane tostato con pomodoro",
        price=6.5,
        display_order=0,
    )
    tiramisu = MenuItem(section_id=dolci.id, name="Tiramisù", item_type="dessert", price=7, display_order=0)
    db_session.add_all([bruschetta, tiramisu])
    db_session.flush()

    pane = ItemIngredient(item_id=bruschetta.id, name="Pane", display_order=0, is_main=True)
    pomodoro = ItemIngredient(item_id=bruschetta.id, name="Pomodoro", display_order=1)
    glutine = ItemAllergen(item_id=bruschetta.id, allergen_code="glutine")
    db_session.add_all([pane, pomodoro, glutine])
    db_session.commit()

    return {
        "menu": menu,
        "antipasti": antipasti,
        "dolci": dolci,
        "bruschetta": bruschetta,
        "tiramisu": tiramisu,
        "pane": pane,
        "pomodoro": pomodoro,
        "glutine": glutine,
    }
