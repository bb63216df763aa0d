"""Domain models for users."""

from dataclasses import dataclass, field
from uuid import UUID

from nutrilog.domain.nutrition import DailyNutrition


@dataclass(frozen=True)
class UserRecord:
    """Represents a user document stored in the database."""

    id: UUID
    name: str
    username: str
    email: str
    password_hash: str
    daily_nutrition: tuple[DailyNutrition, ...] = field(default_factory=tuple)
    version: int = 0


@dataclass(frozen=True)
class UserProfile:
    """Public profile fields of a user."""

    name: str
    username: str
    email: str


@dataclass(frozen=True)
class AuthResult:
    """Token issued after signup or login."""

    token: str
    username: str
    user_id: UUID
