"""Services for the shared food catalog."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from nutrilog.domain.foods import FoodInput, FoodItem
from nutrilog.errors import ConflictError, ValidationError
from nutrilog.services.users import UserService


class FoodRepository(Protocol):
    """Persistence interface for the food catalog."""

    def exists_by_name(self, name: str) -> bool:
        """Return true when any catalog item already uses the name."""

    def create_food(
        self, food: FoodInput, user_id: UUID | None, is_global: bool
    ) -> FoodItem:
        """Create a catalog item and return it."""

    def list_visible(self, user_id: UUID) -> list[FoodItem]:
        """Return items owned by the user plus global items."""

    def list_all(self) -> list[FoodItem]:
        """Return every catalog item."""


@dataclass
class FoodCatalogService:
    """Application service for catalog operations."""

    user_service: UserService
    repository: FoodRepository

    def add_food(self, username: str, payload: dict[str, object]) -> FoodItem:
        """Add a food owned by the user."""
        food = _validate(payload)
        user = self.user_service.get_user(username)
        return self._create(food, user_id=user.id, is_global=False)

    def add_global_food(self, payload: dict[str, object]) -> FoodItem:
        """Add a food visible to every user."""
        return self._create(_validate(payload), user_id=None, is_global=True)

    def list_foods(self, username: str) -> list[FoodItem]:
        """Return the user's own foods and all global foods."""
        user = self.user_service.get_user(username)
        return self.repository.list_visible(user.id)

    def list_all(self) -> list[FoodItem]:
        """Return the whole catalog."""
        return self.repository.list_all()

    def _create(
        self, food: FoodInput, user_id: UUID | None, is_global: bool
    ) -> FoodItem:
        if self.repository.exists_by_name(food.name):
            raise ConflictError(f"{food.name} already exists.")
        return self.repository.create_food(food, user_id=user_id, is_global=is_global)


def _validate(payload: dict[str, object]) -> FoodInput:
    try:
        return FoodInput.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc
