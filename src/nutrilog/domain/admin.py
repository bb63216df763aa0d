"""Admin domain models."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class AdminUser:
    """Minimal admin view of a user."""

    id: UUID
    name: str
    username: str
    email: str
    days_logged: int
    last_logged_date: date | None
