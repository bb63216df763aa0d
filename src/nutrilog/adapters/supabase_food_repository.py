"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrilog.adapters.supabase_errors import store_errors
from nutrilog.domain.foods import FoodCategory, FoodInput, FoodItem
from nutrilog.errors import StoreError
from nutrilog.services.foods import FoodRepository


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for catalog items."""

    client: Client

    def exists_by_name(self, name: str) -> bool:
        """Return true when a food with the name is already stored."""
        with store_errors("look up food"):
            response = (
                self.client.table("foods")
                .select("id")
                .eq("name", name)
                .limit(1)
                .execute()
            )
        return bool(response.data)

    def create_food(
        self, food: FoodInput, user_id: UUID | None, is_global: bool
    ) -> FoodItem:
        """Create a catalog item and return it."""
        payload = {
            **food.model_dump(mode="json"),
            "user_id": str(user_id) if user_id else None,
            "is_global": is_global,
        }
        with store_errors(
            "create food", conflict_message=f"{food.name} already exists."
        ):
            response = self.client.table("foods").insert(payload).execute()
        if not response.data:
            raise StoreError("Failed to create food entry")
        return _parse_food(response.data[0])

    def list_visible(self, user_id: UUID) -> list[FoodItem]:
        """Return foods owned by the user or marked global."""
        with store_errors("list foods"):
            response = (
                self.client.table("foods")
                .select("*")
                .or_(f"user_id.eq.{user_id},is_global.eq.true")
                .order("name")
                .execute()
            )
        return [_parse_food(row) for row in response.data or []]

    def list_all(self) -> list[FoodItem]:
        """Return every catalog item."""
        with store_errors("list foods"):
            response = self.client.table("foods").select("*").order("name").execute()
        return [_parse_food(row) for row in response.data or []]


def _parse_food(row: dict[str, object]) -> FoodItem:
    """Parse a food row into a domain model."""
    raw_user_id = row.get("user_id")
    return FoodItem(
        id=UUID(str(row["id"])),
        category=FoodCategory(row["category"]),
        name=str(row.get("name", "")),
        protein=float(row.get("protein", 0.0)),
        fat=float(row.get("fat", 0.0)),
        carbs=float(row.get("carbs", 0.0)),
        calories=float(row.get("calories", 0.0)),
        quantity=str(row.get("quantity", "")),
        user_id=UUID(str(raw_user_id)) if raw_user_id else None,
        is_global=bool(row.get("is_global", False)),
    )
