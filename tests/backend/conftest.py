"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for testing
the user service and its RPC routes.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio


MAX_CARS = 3


# =============================================================================
# User Service Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def user_service(mock_user_db):
    """UserService over the mock database, with a small car limit."""
    from user_service.services.user_service import UserService

    return UserService(mock_user_db, max_cars=MAX_CARS)


@pytest_asyncio.fixture
async def created_user(user_service, test_user_data) -> dict:
    """A user stored through the service."""
    return await user_service.update(dict(test_user_data))


@pytest.fixture
def mock_user_service():
    """
    Create a fully mocked UserService.
    
    All methods are AsyncMock, allowing you to configure return values:
    
        mock_user_service.fetch.return_value = {...}
    """
    service = MagicMock()
    service.update = AsyncMock()
    service.activate = AsyncMock()
    service.deactivate = AsyncMock()
    service.fetch = AsyncMock()
    service.count = AsyncMock()
    service.find = AsyncMock()
    service.cars_count = AsyncMock()
    service.add_car = AsyncMock()
    service.remove_car = AsyncMock()
    return service


# =============================================================================
# App Override Helpers
# =============================================================================

@pytest.fixture
def app_with_service(app, user_service):
    """App whose routes use the UserService over the mock database."""
    from user_service.routers.user import get_user_service

    app.dependency_overrides[get_user_service] = lambda: user_service
    return app


@pytest.fixture
def app_with_mock_service(app, mock_user_service):
    """App whose routes use the fully mocked UserService."""
    from user_service.routers.user import get_user_service

    app.dependency_overrides[get_user_service] = lambda: mock_user_service
    return app


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, detail_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "detail" in data
        if detail_contains:
            assert detail_contains.lower() in str(data["detail"]).lower()
    return _assert
