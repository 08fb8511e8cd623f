"""
Core module - Password hashing and the service error taxonomy.
"""
from user_service.core.security import hash_password, verify_password
from user_service.core.errors import (
    UserServiceError,
    DuplicateEmailError,
    CarLimitExceededError,
    InvalidCarIdError,
    InvalidFilterError,
    UserValidationError,
)

__all__ = [
    "hash_password",
    "verify_password",
    "UserServiceError",
    "DuplicateEmailError",
    "CarLimitExceededError",
    "InvalidCarIdError",
    "InvalidFilterError",
    "UserValidationError",
]
