"""
User RPC router.

Each service method is exposed as POST /user/<method> taking one JSON body.
"""
from typing import Optional

from bson.errors import InvalidId
from fastapi import APIRouter, Depends, HTTPException, status

from user_service.core.errors import UserServiceError
from user_service.database.connections import get_database
from user_service.schemas.user import (
    AddCarRequest,
    CarsCountRequest,
    CountRequest,
    CountResponse,
    FetchRequest,
    FindRequest,
    RemoveCarRequest,
    SuccessResponse,
    UpdateRequest,
    UserIdRequest,
    UserObject,
)
from user_service.services.user_service import UserService

router = APIRouter(prefix="/user", tags=["User"])


async def get_user_service() -> UserService:
    """Dependency to get UserService instance."""
    db = await get_database()
    return UserService(db)


def to_http_error(error: Exception) -> HTTPException:
    """Translate a service error into the HTTP error reported to callers."""
    if isinstance(error, UserServiceError):
        return HTTPException(status_code=error.status_code, detail=str(error))
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"Invalid identifier: {error}",
    )


@router.post(
    "/update",
    response_model=Optional[UserObject],
    summary="Create or update a user",
)
async def update(
    body: UpdateRequest,
    user_service: UserService = Depends(get_user_service),
):
    """
    Create a new user when **data** has no `_id`, otherwise update the
    given fields of an existing one.

    - **fields**: Optional list of fields to return
    """
    try:
        return await user_service.update(body.data, body.fields)
    except (UserServiceError, InvalidId) as e:
        raise to_http_error(e)


@router.post(
    "/activate",
    response_model=SuccessResponse,
    summary="Activate a user",
)
async def activate(
    body: UserIdRequest,
    user_service: UserService = Depends(get_user_service),
):
    """Activate user in the system."""
    return {"success": await user_service.activate(body.id)}


@router.post(
    "/deactivate",
    response_model=SuccessResponse,
    summary="Deactivate a user",
)
async def deactivate(
    body: UserIdRequest,
    user_service: UserService = Depends(get_user_service),
):
    """Deactivate user in the system."""
    return {"success": await user_service.deactivate(body.id)}


@router.post(
    "/fetch",
    response_model=Optional[UserObject],
    summary="Get a user by e-mail or ID",
)
async def fetch(
    body: FetchRequest,
    user_service: UserService = Depends(get_user_service),
):
    """
    Look up a user by e-mail (**criteria** containing `@`) or by ID.

    Returns `null` when no such user exists.
    """
    try:
        return await user_service.fetch(body.criteria, body.fields)
    except InvalidId as e:
        raise to_http_error(e)


@router.post(
    "/count",
    response_model=CountResponse,
    summary="Count users",
)
async def count(
    body: CountRequest,
    user_service: UserService = Depends(get_user_service),
):
    """Count users matching **filters**, all users when omitted."""
    try:
        return {"count": await user_service.count(body.filters)}
    except UserServiceError as e:
        raise to_http_error(e)


@router.post(
    "/find",
    response_model=list[UserObject],
    summary="List users",
)
async def find(
    body: FindRequest,
    user_service: UserService = Depends(get_user_service),
):
    """
    List users matching **filters**.

    - **fields**: Optional list of fields to return for each user
    - **skip**: Records to skip (0 skips nothing)
    - **limit**: Max records to return (0 returns all)
    """
    try:
        return await user_service.find(
            body.filters, body.fields, body.skip, body.limit
        )
    except UserServiceError as e:
        raise to_http_error(e)


@router.post(
    "/carsCount",
    response_model=CountResponse,
    summary="Count cars of a user",
)
async def cars_count(
    body: CarsCountRequest,
    user_service: UserService = Depends(get_user_service),
):
    """Number of cars attached to the user, 0 when the user is unknown."""
    return {"count": await user_service.cars_count(body.id_or_email)}


@router.post(
    "/addCar",
    response_model=Optional[UserObject],
    summary="Attach a car to a user",
)
async def add_car(
    body: AddCarRequest,
    user_service: UserService = Depends(get_user_service),
):
    """
    Attach a car to a user.

    Fails with 409 when the user already has the maximum number of cars,
    returns `null` when the car could not be added.
    """
    try:
        return await user_service.add_car(
            body.user_id,
            body.car_id,
            body.reg_number,
            body.selected_fields,
        )
    except UserServiceError as e:
        raise to_http_error(e)


@router.post(
    "/removeCar",
    response_model=Optional[UserObject],
    summary="Remove a car from its owner",
)
async def remove_car(
    body: RemoveCarRequest,
    user_service: UserService = Depends(get_user_service),
):
    """
    Remove a car from the user owning it.

    Fails with 404 when no user owns such car.
    """
    try:
        return await user_service.remove_car(body.car_id, body.selected_fields)
    except UserServiceError as e:
        raise to_http_error(e)
