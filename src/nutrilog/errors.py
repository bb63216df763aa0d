"""Error types raised by services and adapters."""

from pydantic import ValidationError as PydanticValidationError


class NutrilogError(Exception):
    """Base class for application errors."""


class ValidationError(NutrilogError):
    """Raised when an inbound payload has the wrong shape."""

    def __init__(self, message: str, errors: list[dict[str, object]] | None = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        """Build from a pydantic error, keeping location, message and type."""
        return cls(
            "Invalid input",
            [
                {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
                for error in exc.errors()
            ],
        )


class ConflictError(NutrilogError):
    """Raised when a uniqueness constraint would be violated."""


class AuthError(NutrilogError):
    """Raised for bad credentials and bad or expired tokens."""


class NotFoundError(NutrilogError):
    """Raised when an authenticated user no longer resolves to a record."""


class StoreError(NutrilogError):
    """Raised when the persistence layer fails."""
