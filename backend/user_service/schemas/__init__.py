"""
Request and response schemas for RPC endpoints.
"""
from user_service.schemas.user import (
    CarObject,
    UserObject,
    UserData,
    UserFilters,
    UpdateRequest,
    UserIdRequest,
    FetchRequest,
    CountRequest,
    FindRequest,
    CarsCountRequest,
    AddCarRequest,
    RemoveCarRequest,
    CountResponse,
    SuccessResponse,
)

__all__ = [
    # Objects
    "CarObject",
    "UserObject",
    "UserData",
    "UserFilters",
    # Requests
    "UpdateRequest",
    "UserIdRequest",
    "FetchRequest",
    "CountRequest",
    "FindRequest",
    "CarsCountRequest",
    "AddCarRequest",
    "RemoveCarRequest",
    # Responses
    "CountResponse",
    "SuccessResponse",
]
