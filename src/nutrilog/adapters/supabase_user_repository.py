"""Supabase-backed user repository."""

from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrilog.adapters.supabase_errors import store_errors
from nutrilog.domain.admin import AdminUser
from nutrilog.domain.models import UserRecord
from nutrilog.domain.nutrition import (
    DailyNutrition,
    daily_nutrition_from_dict,
    daily_nutrition_to_dict,
)
from nutrilog.errors import StoreError
from nutrilog.services.users import UserRepository

_USER_COLUMNS = "id, name, username, email, password_hash, daily_nutrition, version"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence.

    Each user is one row whose ``daily_nutrition`` column holds the whole
    history as a JSON document.
    """

    client: Client

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user for a username, if present."""
        with store_errors("load user"):
            response = (
                self.client.table("users")
                .select(_USER_COLUMNS)
                .eq("username", username)
                .limit(1)
                .execute()
            )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(
        self, name: str, username: str, email: str, password_hash: str
    ) -> UserRecord:
        """Create a new user row and return it."""
        with store_errors("create user", conflict_message="Username already exists."):
            response = (
                self.client.table("users")
                .insert(
                    {
                        "name": name,
                        "username": username,
                        "email": email,
                        "password_hash": password_hash,
                        "daily_nutrition": [],
                        "version": 0,
                    }
                )
                .execute()
            )
        if not response.data:
            raise StoreError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        """Replace the stored password hash."""
        with store_errors("update password"):
            response = (
                self.client.table("users")
                .update({"password_hash": password_hash})
                .eq("id", str(user_id))
                .execute()
            )
        if not response.data:
            raise StoreError("Failed to update password")

    def save_daily_nutrition(
        self,
        user_id: UUID,
        history: Sequence[DailyNutrition],
        expected_version: int,
    ) -> bool:
        """Write the history only if the row still has the expected version."""
        with store_errors("save nutrition"):
            response = (
                self.client.table("users")
                .update(
                    {
                        "daily_nutrition": [
                            daily_nutrition_to_dict(record) for record in history
                        ],
                        "version": expected_version + 1,
                    }
                )
                .eq("id", str(user_id))
                .eq("version", expected_version)
                .execute()
            )
        return bool(response.data)

    def list_users(self) -> list[AdminUser]:
        """Return all users ordered by username."""
        with store_errors("list users"):
            response = (
                self.client.table("users")
                .select("id, name, username, email, daily_nutrition")
                .order("username")
                .execute()
            )
        users = []
        for row in response.data or []:
            history = _parse_history(row)
            users.append(
                AdminUser(
                    id=UUID(row["id"]),
                    name=str(row.get("name", "")),
                    username=str(row["username"]),
                    email=str(row.get("email", "")),
                    days_logged=len(history),
                    last_logged_date=max(
                        (record.day for record in history), default=None
                    ),
                )
            )
        return users


def _parse_user(row: dict[str, object]) -> UserRecord:
    """Parse a user row into a domain model."""
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        username=str(row["username"]),
        email=str(row.get("email", "")),
        password_hash=str(row.get("password_hash", "")),
        daily_nutrition=tuple(_parse_history(row)),
        version=int(row.get("version") or 0),
    )


def _parse_history(row: dict[str, object]) -> list[DailyNutrition]:
    """Parse the stored nutrition document of a user row."""
    try:
        return [
            daily_nutrition_from_dict(item)
            for item in row.get("daily_nutrition") or []
        ]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise StoreError(
            f"Malformed nutrition document for user {row.get('id')}"
        ) from exc
