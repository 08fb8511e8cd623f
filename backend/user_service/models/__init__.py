"""
Pydantic models for database documents and data structures.
"""
from user_service.models.user import User, UserPatch, Car

__all__ = [
    "User",
    "UserPatch",
    "Car",
]
