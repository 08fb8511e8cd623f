"""
API routers.
"""
from user_service.routers import health, user

__all__ = ["health", "user"]
