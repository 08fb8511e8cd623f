"""
Global test fixtures for the User Service.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor)
- Test user factories
- FastAPI test clients
"""

import sys
from pathlib import Path
from typing import Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def mock_user_db(mock_async_mongo_client):
    """Provide mock user database with indexes like the real app."""
    from user_service.database.databases.user_db import create_user_indexes

    db = mock_async_mongo_client["user"]
    await create_user_indexes(db)
    yield db


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Basic user data for creation."""
    return {
        "email": "john.doe@example.com",
        "password": "SecurePassword123!",
        "firstName": "John",
        "lastName": "Doe",
    }


@pytest.fixture
def make_user_data():
    """
    Factory for distinct user data.

    Usage:
        def test_something(make_user_data):
            data = make_user_data(3, isActive=False)
    """
    def _make(index: int, **overrides) -> dict:
        data = {
            "email": f"user{index}@example.com",
            "password": f"Password{index}!",
            "firstName": f"First{index}",
            "lastName": f"Last{index}",
        }
        data.update(overrides)
        return data
    return _make


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app():
    """
    Create FastAPI app for testing.
    
    Note: This imports the actual app and should be used with mocked
    database dependencies.
    """
    from user_service.main import app
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.
    
    The lifespan is not entered, so no real database connection is made.
    """
    yield TestClient(app)


@pytest_asyncio.fixture
async def async_client(app):
    """
    Create an async test client.
    
    Use this for testing async endpoints.
    """
    from httpx import AsyncClient, ASGITransport
    
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
