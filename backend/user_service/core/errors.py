"""
User service errors.

Each error carries the HTTP status code and error code the API reports
it with. All of them are ValueErrors: they describe a request the service
refuses, never a store failure.
"""


class UserServiceError(ValueError):
    """Base user service error."""

    error_code: str = "USER_SERVICE_ERROR"
    status_code: int = 400

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def default_message(self) -> str:
        return "User service error occurred"


class DuplicateEmailError(UserServiceError):
    """Another user already owns this e-mail."""

    error_code = "DUPLICATE_EMAIL"
    status_code = 409

    @property
    def default_message(self) -> str:
        return "Duplicate e-mail, such user already exists"


class CarLimitExceededError(UserServiceError):
    """User already holds the maximum number of cars."""

    error_code = "CAR_LIMIT_EXCEEDED"
    status_code = 409

    @property
    def default_message(self) -> str:
        return "Max number of cars exceeded!"


class InvalidCarIdError(UserServiceError):
    """No user owns a car with the given identifier."""

    error_code = "INVALID_CAR_ID"
    status_code = 404

    @property
    def default_message(self) -> str:
        return "Invalid car identifier given!"


class InvalidFilterError(UserServiceError):
    """Filter field is not one of the supported user filters."""

    error_code = "INVALID_FILTER"
    status_code = 400

    @property
    def default_message(self) -> str:
        return "Unsupported user filter"


class UserValidationError(UserServiceError):
    """User data misses required fields."""

    error_code = "VALIDATION_FAILED"
    status_code = 422

    @property
    def default_message(self) -> str:
        return "User data validation failed"
