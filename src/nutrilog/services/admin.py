"""Admin service for reporting."""

from dataclasses import dataclass

from nutrilog.domain.admin import AdminUser
from nutrilog.services.users import UserRepository


@dataclass
class AdminService:
    """Service for admin dashboards."""

    user_repository: UserRepository

    def list_users(self) -> list[dict[str, object]]:
        """Return users with logging summaries."""
        return [_serialize_user(user) for user in self.user_repository.list_users()]


def _serialize_user(user: AdminUser) -> dict[str, object]:
    return {
        "id": str(user.id),
        "name": user.name,
        "username": user.username,
        "email": user.email,
        "days_logged": user.days_logged,
        "last_logged_date": user.last_logged_date.isoformat()
        if user.last_logged_date
        else None,
    }
