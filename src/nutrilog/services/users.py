"""User-related business logic."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrilog.domain.admin import AdminUser
from nutrilog.domain.models import UserProfile, UserRecord
from nutrilog.domain.nutrition import DailyNutrition
from nutrilog.errors import NotFoundError


class UserRepository(Protocol):
    """Persistence interface for user documents."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user with the given username, if present."""

    def create_user(
        self, name: str, username: str, email: str, password_hash: str
    ) -> UserRecord:
        """Create and return a new user record."""

    def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        """Replace the stored password hash."""

    def save_daily_nutrition(
        self,
        user_id: UUID,
        history: Sequence[DailyNutrition],
        expected_version: int,
    ) -> bool:
        """Store the history if the version still matches; report success."""

    def list_users(self) -> list[AdminUser]:
        """Return summaries of all users."""


@dataclass
class UserService:
    """Application service for reading user records."""

    repository: UserRepository

    def get_user(self, username: str) -> UserRecord:
        """Return the user for an authenticated username."""
        user = self.repository.get_by_username(username)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_profile(self, username: str) -> UserProfile:
        """Return public profile fields for a user."""
        user = self.get_user(username)
        return UserProfile(name=user.name, username=user.username, email=user.email)
