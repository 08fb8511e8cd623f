"""
User request/response schemas.

Every RPC handler takes one explicit request body; field names on the
wire are camelCase, the same as in stored documents.
"""
from typing import Optional

from pydantic import BaseModel, Field


class CarObject(BaseModel):
    """Car as returned to callers."""
    id: Optional[str] = Field(None, alias="_id", description="Car ID")
    car_id: Optional[str] = Field(None, alias="carId", description="External car reference")
    reg_number: Optional[str] = Field(None, alias="regNumber", description="Registration number")

    class Config:
        populate_by_name = True


class UserObject(BaseModel):
    """
    User as returned to callers.

    Every field is optional since callers may restrict the projection.
    """
    id: Optional[str] = Field(None, alias="_id", description="User ID")
    email: Optional[str] = Field(None, description="User email")
    password: Optional[str] = Field(None, description="Password hash")
    is_active: Optional[bool] = Field(None, alias="isActive", description="Active flag")
    is_admin: Optional[bool] = Field(None, alias="isAdmin", description="Admin flag")
    first_name: Optional[str] = Field(None, alias="firstName", description="First name")
    last_name: Optional[str] = Field(None, alias="lastName", description="Last name")
    cars: Optional[list[CarObject]] = Field(None, description="Attached cars")

    class Config:
        populate_by_name = True


class UserData(BaseModel):
    """
    User data accepted by update.

    Without an _id a new user is created, with an _id only the given
    fields of that user are changed. Cars are managed by addCar/removeCar.
    """
    id: Optional[str] = Field(None, alias="_id", description="Existing user ID")
    email: Optional[str] = Field(None, description="User email")
    password: Optional[str] = Field(None, description="Plain text password")
    is_active: Optional[bool] = Field(None, alias="isActive")
    is_admin: Optional[bool] = Field(None, alias="isAdmin")
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")

    class Config:
        populate_by_name = True
        extra = "forbid"

    def to_payload(self) -> dict:
        """Only the fields the caller actually provided, keyed as stored."""
        return self.model_dump(by_alias=True, exclude_none=True)


class UserFilters(BaseModel):
    """Filters for count and find, unknown fields are rejected."""
    email: Optional[str] = Field(None, description="Partial e-mail match")
    is_active: Optional[bool] = Field(None, alias="isActive", description="Exact active flag")
    is_admin: Optional[bool] = Field(None, alias="isAdmin", description="Exact admin flag")
    first_name: Optional[str] = Field(None, alias="firstName", description="Partial first name match")
    last_name: Optional[str] = Field(None, alias="lastName", description="Partial last name match")

    class Config:
        populate_by_name = True
        extra = "forbid"


# Requests

class UpdateRequest(BaseModel):
    """update request body."""
    data: UserData
    fields: Optional[list[str]] = Field(None, description="Fields to return")


class UserIdRequest(BaseModel):
    """activate/deactivate request body."""
    id: str = Field(..., description="User ID")


class FetchRequest(BaseModel):
    """fetch request body."""
    criteria: str = Field(..., description="User ID or e-mail")
    fields: Optional[list[str]] = Field(None, description="Fields to return")


class CountRequest(BaseModel):
    """count request body."""
    filters: Optional[UserFilters] = None


class FindRequest(BaseModel):
    """find request body."""
    filters: Optional[UserFilters] = None
    fields: Optional[list[str]] = Field(None, description="Fields to return")
    skip: Optional[int] = Field(None, ge=0, description="Records to skip")
    limit: Optional[int] = Field(None, ge=0, description="Max records to return")


class CarsCountRequest(BaseModel):
    """carsCount request body."""
    id_or_email: str = Field(..., alias="idOrEmail", description="User ID or e-mail")

    class Config:
        populate_by_name = True


class AddCarRequest(BaseModel):
    """addCar request body."""
    user_id: str = Field(..., alias="userId", description="Owner user ID")
    car_id: str = Field(..., alias="carId", description="External car reference")
    reg_number: str = Field(..., alias="regNumber", description="Registration number")
    selected_fields: Optional[list[str]] = Field(
        None,
        alias="selectedFields",
        description="Fields to return"
    )

    class Config:
        populate_by_name = True


class RemoveCarRequest(BaseModel):
    """removeCar request body."""
    car_id: str = Field(..., alias="carId", description="Car ID to remove")
    selected_fields: Optional[list[str]] = Field(
        None,
        alias="selectedFields",
        description="Fields to return"
    )

    class Config:
        populate_by_name = True


# Responses

class CountResponse(BaseModel):
    """Counting result."""
    count: int = Field(..., description="Number of matched records")


class SuccessResponse(BaseModel):
    """Operation execution result."""
    success: bool = Field(..., description="Whether the operation succeeded")
