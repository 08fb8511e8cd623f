"""
User service for user accounts and the cars attached to them.
"""
import logging
import re
from typing import Any, Mapping, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError, PyMongoError

from user_service.config import get_settings
from user_service.core.errors import (
    CarLimitExceededError,
    DuplicateEmailError,
    InvalidCarIdError,
    InvalidFilterError,
    UserValidationError,
)
from user_service.core.security import hash_password
from user_service.database.databases import user_db
from user_service.models.user import User, UserPatch
from user_service.schemas.user import UserData, UserFilters

logger = logging.getLogger(__name__)

EMAIL_CRITERIA = "email"
ID_CRITERIA = "id"

PARTIAL_MATCH = "partial"
EXACT_MATCH = "exact"

# Allowed filter fields and how each one is matched
FILTER_FIELDS = {
    "email": PARTIAL_MATCH,
    "firstName": PARTIAL_MATCH,
    "lastName": PARTIAL_MATCH,
    "isActive": EXACT_MATCH,
    "isAdmin": EXACT_MATCH,
}

# Fields update may write, cars are only touched by add_car/remove_car
USER_DATA_FIELDS = {
    "email",
    "password",
    "isActive",
    "isAdmin",
    "firstName",
    "lastName",
}


def classify_criteria(criteria: str) -> str:
    """
    Tell whether a lookup string is an e-mail or a user identifier.

    The e-mail test runs first: any string containing "@" is an e-mail,
    anything else is taken as an identifier (and may turn out malformed).

    Args:
        criteria: User identifier or e-mail

    Returns:
        EMAIL_CRITERIA or ID_CRITERIA
    """
    if "@" in criteria:
        return EMAIL_CRITERIA
    return ID_CRITERIA


def prepare(filters: Union[UserFilters, Mapping[str, Any], None] = None) -> dict:
    """
    Turn user filters into a MongoDB query.

    Text fields become case-insensitive partial matches, flags are
    matched exactly. Empty filters match every user.

    Args:
        filters: UserFilters model or mapping of filter field to value

    Returns:
        Query dictionary

    Raises:
        InvalidFilterError: If a filter field is not supported or its
            value has the wrong type
    """
    if filters is None:
        return {}

    if not isinstance(filters, UserFilters):
        unknown = set(filters) - set(FILTER_FIELDS)
        if unknown:
            raise InvalidFilterError(
                f"Unsupported user filter: {', '.join(sorted(unknown))}"
            )
        try:
            filters = UserFilters.model_validate(filters)
        except ValidationError as e:
            raise InvalidFilterError(f"Invalid user filters: {_invalid_fields(e)}")

    query = {}
    for field, value in filters.model_dump(by_alias=True, exclude_none=True).items():
        kind = FILTER_FIELDS[field]
        if kind == PARTIAL_MATCH:
            query[field] = {"$regex": re.escape(str(value)), "$options": "i"}
        else:
            query[field] = value

    return query


def _invalid_fields(error: ValidationError) -> str:
    return ", ".join(
        ".".join(str(part) for part in e["loc"]) for e in error.errors()
    )


def _projection(fields: Optional[list[str]]) -> Optional[dict]:
    """
    Build a projection from field names, "-name" excludes a field.

    Inclusions and exclusions can not be mixed, except for "-_id".
    """
    if not fields:
        return None
    projection = {}
    for field in fields:
        if field.startswith("-"):
            projection[field[1:]] = 0
        else:
            projection[field] = 1
    return projection


def _to_object(user_doc: Optional[dict]) -> Optional[dict]:
    """Render ObjectIds of a user document as strings."""
    if user_doc is None:
        return None

    if "_id" in user_doc:
        user_doc["_id"] = str(user_doc["_id"])
    for car in user_doc.get("cars") or []:
        if "_id" in car:
            car["_id"] = str(car["_id"])

    return user_doc


class UserService:
    """Service for user and car operations."""

    def __init__(self, db: AsyncIOMotorDatabase, max_cars: Optional[int] = None):
        """Initialize with the user database."""
        self.db = db
        self.users_collection = db[user_db.Collections.USERS]
        self.settings = get_settings()
        if max_cars is None:
            max_cars = self.settings.max_user_cars_count
        self.max_cars = max_cars

    def _lookup(self, criteria: str) -> dict:
        """Build the query matching a user by e-mail or identifier."""
        if classify_criteria(criteria) == EMAIL_CRITERIA:
            return {"email": criteria}
        return {"_id": ObjectId(criteria)}

    # ==================== Users ====================

    async def update(
        self,
        data: Union[UserData, Mapping[str, Any]],
        fields: Optional[list[str]] = None,
    ) -> Optional[dict]:
        """
        Create a new user or update an existing one.

        Data without an _id creates a user, data with an _id sets only the
        given fields on that user. Fields are validated the same way in both
        cases, the password, when given, is hashed.

        Args:
            data: User data fields
            fields: Fields to return, all when omitted

        Returns:
            Saved user as re-read from the database, None if the user
            to update does not exist

        Raises:
            DuplicateEmailError: If the e-mail belongs to another user
            UserValidationError: If fields are unknown or required ones miss
        """
        if isinstance(data, UserData):
            payload = data.to_payload()
        else:
            payload = {k: v for k, v in data.items() if v is not None}

        user_id = payload.pop("_id", None)

        unknown = set(payload) - USER_DATA_FIELDS
        if unknown:
            raise UserValidationError(
                f"Unsupported user fields: {', '.join(sorted(unknown))}"
            )

        if user_id is None:
            return await self._create(payload, fields)

        try:
            user_doc = UserPatch(**payload).to_document()
        except ValidationError as e:
            raise UserValidationError(f"Invalid user data: {_invalid_fields(e)}")

        if "password" in user_doc:
            user_doc["password"] = hash_password(user_doc["password"])

        if user_doc:
            try:
                await self.users_collection.update_one(
                    {"_id": ObjectId(user_id)},
                    {"$set": user_doc},
                )
            except DuplicateKeyError:
                raise DuplicateEmailError()

        return await self.fetch(str(user_id), fields)

    async def _create(self, payload: dict, fields: Optional[list[str]]) -> Optional[dict]:
        try:
            user = User(**payload)
        except ValidationError as e:
            raise UserValidationError(f"Invalid user data: {_invalid_fields(e)}")

        user_doc = user.to_document()
        user_doc["password"] = hash_password(user_doc["password"])
        try:
            result = await self.users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            raise DuplicateEmailError()

        logger.info(f"Created user {result.inserted_id}")
        return await self.fetch(user_doc["email"], fields)

    async def activate(self, user_id: str) -> bool:
        """Activate user in the system."""
        return await self._set_active(user_id, True)

    async def deactivate(self, user_id: str) -> bool:
        """Deactivate user in the system."""
        return await self._set_active(user_id, False)

    async def _set_active(self, user_id: str, is_active: bool) -> bool:
        action = "activating" if is_active else "deactivating"
        try:
            result = await self.users_collection.update_one(
                {"_id": ObjectId(user_id)},
                {"$set": {"isActive": is_active}},
            )
        except (InvalidId, PyMongoError) as e:
            logger.warning(f"Error when {action} user {user_id}: {e}")
            return False

        if result.matched_count != 1:
            logger.warning(f"Error when {action} user {user_id}: user not found")
            return False
        return True

    async def fetch(
        self, criteria: str, fields: Optional[list[str]] = None
    ) -> Optional[dict]:
        """
        Get user by e-mail or by identifier.

        Args:
            criteria: User identifier or e-mail
            fields: Fields to return, all when omitted

        Returns:
            User or None if not found

        Raises:
            InvalidId: If criteria is neither an e-mail nor a valid identifier
        """
        user_doc = await self.users_collection.find_one(
            self._lookup(criteria), _projection(fields)
        )
        return _to_object(user_doc)

    async def count(
        self, filters: Union[UserFilters, Mapping[str, Any], None] = None
    ) -> int:
        """Count users matching the filters, all users without filters."""
        return await self.users_collection.count_documents(prepare(filters))

    async def find(
        self,
        filters: Union[UserFilters, Mapping[str, Any], None] = None,
        fields: Optional[list[str]] = None,
        skip: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """
        List users matching the filters.

        Args:
            filters: User filters, all users when omitted
            fields: Fields to return for each user, all when omitted
            skip: Number of records to skip, zero or None skips nothing
            limit: Max number of records, zero or None returns all

        Returns:
            Users in store order
        """
        cursor = self.users_collection.find(
            prepare(filters),
            _projection(fields),
            skip=skip or 0,
            limit=limit or 0,
        )
        users = await cursor.to_list(length=None)
        return [_to_object(u) for u in users]

    # ==================== Cars ====================

    async def cars_count(self, id_or_email: str) -> int:
        """
        Count cars attached to a user.

        Args:
            id_or_email: User identifier or e-mail

        Returns:
            Number of cars, 0 if the user is not found
        """
        try:
            match = self._lookup(id_or_email)
        except InvalidId:
            logger.debug(f"Malformed user identifier: {id_or_email}")
            return 0

        pipeline = [
            {"$match": match},
            {"$project": {
                "_id": 0,
                "count": {"$size": {"$ifNull": ["$cars", []]}},
            }},
        ]
        results = await self.users_collection.aggregate(pipeline).to_list(length=1)

        if not results:
            return 0
        return results[0]["count"]

    async def add_car(
        self,
        user_id: str,
        car_id: str,
        reg_number: str,
        selected_fields: Optional[list[str]] = None,
    ) -> Optional[dict]:
        """
        Attach a new car to a user.

        Args:
            user_id: Owner user identifier
            car_id: External car reference
            reg_number: Car registration number
            selected_fields: Fields to return, all when omitted

        Returns:
            Updated user or None if the car could not be added

        Raises:
            CarLimitExceededError: If the user already has max cars
        """
        if await self.cars_count(user_id) >= self.max_cars:
            raise CarLimitExceededError()

        car = {"_id": ObjectId(), "carId": car_id, "regNumber": reg_number}

        try:
            # Push only while the last allowed slot is free
            result = await self.users_collection.update_one(
                {
                    "_id": ObjectId(user_id),
                    f"cars.{self.max_cars - 1}": {"$exists": False},
                },
                {"$push": {"cars": car}},
            )

            if result.modified_count != 1:
                if await self.cars_count(user_id) >= self.max_cars:
                    raise CarLimitExceededError()
                logger.warning(f"Error when adding car to user {user_id}: user not found")
                return None

            return await self.fetch(user_id, selected_fields)
        except (InvalidId, PyMongoError) as e:
            logger.warning(f"Error when adding car to user {user_id}: {e}")
            return None

    async def remove_car(
        self, car_id: str, selected_fields: Optional[list[str]] = None
    ) -> Optional[dict]:
        """
        Remove a car from the user owning it.

        Args:
            car_id: Car identifier
            selected_fields: Fields to return, all when omitted

        Returns:
            Updated owner or None if the car could not be removed

        Raises:
            InvalidCarIdError: If no user owns such car
        """
        try:
            car_oid = ObjectId(car_id)
        except InvalidId:
            raise InvalidCarIdError()

        try:
            owner = await self.users_collection.find_one(
                {"cars._id": car_oid}, {"_id": 1}
            )
        except PyMongoError as e:
            logger.warning(f"Error when removing car {car_id}: {e}")
            return None

        if owner is None:
            raise InvalidCarIdError()

        try:
            await self.users_collection.update_one(
                {"_id": owner["_id"]},
                {"$pull": {"cars": {"_id": car_oid}}},
            )
            return await self.fetch(str(owner["_id"]), selected_fields)
        except PyMongoError as e:
            logger.warning(f"Error when removing car {car_id}: {e}")
            return None
