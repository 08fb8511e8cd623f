"""
Service layer for business logic.
"""
from user_service.services.user_service import UserService, classify_criteria, prepare

__all__ = [
    "UserService",
    "classify_criteria",
    "prepare",
]
