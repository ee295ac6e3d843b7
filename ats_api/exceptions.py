"""HTTP error taxonomy.

Every error carries ``status``, ``message`` and ``hint`` and is serialized by
the single handler registered in ``ats_api.main``.
"""

from typing import Any

DEFAULT_HINT = "No hint available"


class HttpException(Exception):
    """Base class for errors that terminate a request with a JSON envelope."""

    status: int = 500

    def __init__(self, status: int, message: str, hint: Any = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.hint = hint

    def to_envelope(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "hint": self.hint if self.hint is not None else DEFAULT_HINT,
        }


class ValidationError(HttpException):
    """Malformed or forbidden query/body fields."""

    def __init__(self, message: str, hint: Any = None):
        super().__init__(400, message, hint)


class InvalidCriteriaError(ValidationError):
    """A filter criteria could not be coerced to the field's type."""

    def __init__(self, field: str | None, value: Any):
        target = f" for field '{field}'" if field else ""
        super().__init__(
            f"Criteria {value!r}{target} is not a valid number",
            "Numeric filters only accept numeric criterias",
        )


class NotFoundError(HttpException):
    def __init__(self, resource: str, identifier: Any):
        super().__init__(404, f"{resource} with id {identifier} not found")


class EmptyCollectionError(HttpException):
    """A list query matched zero rows under the given filters."""

    def __init__(self, collection: str, filters: Any = None):
        hint = (
            {"appliedFilters": filters}
            if filters
            else "The collection is empty, no filter was applied"
        )
        super().__init__(404, f"No {collection} found", hint)


class ExceededPageIndexError(HttpException):
    def __init__(self, hint: str):
        super().__init__(404, "Page index exceeded", hint)


class AuthCredentialsError(HttpException):
    """Bad login; never says which of email or password was wrong."""

    def __init__(self):
        super().__init__(401, "Wrong credentials provided")


class MissingCredentialsError(HttpException):
    def __init__(self):
        super().__init__(
            401,
            "Authentication token missing",
            "Both the Authorization cookie and the x-xsrf-token header are required",
        )


class InvalidTokenError(HttpException):
    def __init__(self):
        super().__init__(
            401,
            "Wrong authentication token",
            "Either the token hasn't been issued by our service or it is expired",
        )


class DuplicateEmailError(HttpException):
    def __init__(self, email: str):
        super().__init__(400, f"User with email {email} already exists")


class DuplicateNameError(HttpException):
    def __init__(self, resource: str, name: str, existing: Any = None):
        super().__init__(400, f"{resource} named {name} already exists", existing)
