"""
User model for the user database.
"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def check_email(value: Optional[str]) -> Optional[str]:
    """E-mails are stored exactly as given, they only need an "@"."""
    if value is not None and "@" not in value:
        raise ValueError("e-mail must contain '@'")
    return value


class Car(BaseModel):
    """
    Car sub-document, embedded in and owned by exactly one user.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    car_id: str = Field(..., alias="carId", description="External car reference")
    reg_number: str = Field(..., alias="regNumber", description="Registration number")

    class Config:
        populate_by_name = True


class User(BaseModel):
    """
    User document model for MongoDB User collection.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    email: str = Field(..., description="Unique email address")
    password: str = Field(..., description="One-way hashed password")
    is_active: bool = Field(default=True, alias="isActive", description="Active/inactive user flag")
    is_admin: bool = Field(default=False, alias="isAdmin", description="Admin role flag")
    first_name: str = Field(..., alias="firstName", description="User's first name")
    last_name: str = Field(..., alias="lastName", description="User's last name")
    cars: list[Car] = Field(
        default_factory=list,
        description="Cars attached to the user, bounded by max_user_cars_count"
    )

    class Config:
        populate_by_name = True

    @field_validator("email")
    @classmethod
    def email_has_at_sign(cls, value: Optional[str]) -> Optional[str]:
        return check_email(value)

    def to_document(self) -> dict:
        """Dump as a document ready for insertion (store assigns _id)."""
        return self.model_dump(by_alias=True, exclude={"id"})


class UserPatch(BaseModel):
    """
    Subset of user fields written by an update, same rules as User.
    """
    email: Optional[str] = None
    password: Optional[str] = None
    is_active: Optional[bool] = Field(None, alias="isActive")
    is_admin: Optional[bool] = Field(None, alias="isAdmin")
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")

    class Config:
        populate_by_name = True
        extra = "forbid"

    @field_validator("email")
    @classmethod
    def email_has_at_sign(cls, value: Optional[str]) -> Optional[str]:
        return check_email(value)

    def to_document(self) -> dict:
        """Only the fields that were given, keyed as stored."""
        return self.model_dump(by_alias=True, exclude_unset=True)
