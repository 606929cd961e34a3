"""
Test configuration and fixtures for the blood bank API.
Provides an in-memory database per test, HTTP clients and data factories.
"""

import os
from typing import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool
from uuid import uuid4

# Test database configuration
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Override environment variables for testing
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt-tokens")
os.environ.setdefault("ALGORITHM", "HS256")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from bloodbank.config import Settings
from bloodbank.database import Database
from bloodbank.main import create_application


def make_database() -> Database:
    # One shared connection so every session sees the same in-memory database
    return Database(TEST_DATABASE_URL, poolclass=StaticPool)


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """A fresh schema for each test."""
    db = make_database()
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session


@pytest.fixture
def app_settings() -> Settings:
    return Settings()


@pytest.fixture
def client(app_settings: Settings) -> Generator[TestClient, None, None]:
    """Test client running the full lifespan against its own database."""
    app = create_application(app_settings, make_database())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def guarded_client() -> Generator[TestClient, None, None]:
    """Test client with bearer tokens required on write endpoints."""
    app = create_application(Settings(REQUIRE_AUTH=True), make_database())
    with TestClient(app) as test_client:
        yield test_client


# --- Data Factories ---


class TestDataFactory:
    """Factory for request payloads with realistic blood bank data."""

    __test__ = False

    @staticmethod
    def unique_email(prefix: str = "test") -> str:
        return f"{prefix}_{uuid4().hex[:8]}@bloodbank.id"

    @staticmethod
    def donor_data(**overrides) -> dict:
        data = {
            "firstName": "Budi",
            "lastName": "Santoso",
            "email": TestDataFactory.unique_email("donor"),
            "city": "Bandung",
            "province": "Jawa Barat",
            "bloodType": "A",
            "rhesus": "+",
            "phoneNumber": "081234567890",
            "lastDonorDate": "2024-01-15",
        }
        data.update(overrides)
        return data

    @staticmethod
    def blood_unit_data(**overrides) -> dict:
        data = {
            "id_donor": None,
            "volume": 350,
            "bloodType": "A",
            "rhesus": "+",
            "status": 1,
            "expiryDate": "2030-12-31",
        }
        data.update(overrides)
        return data

    @staticmethod
    def request_data(**overrides) -> dict:
        data = {
            "id_patient": None,
            "id_doctor": None,
            "bloodtype": "O",
            "rhesus": "-",
            "quantity": 2,
            "urgency": 3,
            "status": 0,
        }
        data.update(overrides)
        return data

    @staticmethod
    def user_data(**overrides) -> dict:
        data = {
            "username": "petugas",
            "email": TestDataFactory.unique_email("user"),
            "password": "Rahasia123!",
        }
        data.update(overrides)
        return data


@pytest.fixture
def factory() -> type:
    return TestDataFactory


# --- Authentication Fixtures ---


def login_headers(client: TestClient, user: dict) -> dict:
    client.post("/api/auth/register", json=user)
    response = client.post(
        "/api/auth/login",
        json={"email": user["email"], "password": user["password"]},
    )
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def login():
    return login_headers


@pytest.fixture
def auth_headers(client: TestClient) -> dict:
    return login_headers(client, TestDataFactory.user_data())
