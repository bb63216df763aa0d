"""Response formatting for catalog items."""

from nutrilog.domain.foods import FoodItem


def serialize_food(food: FoodItem) -> dict[str, object]:
    """Format a catalog item for API responses."""
    return {
        "id": str(food.id),
        "category": food.category.value,
        "name": food.name,
        "protein": food.protein,
        "fat": food.fat,
        "carbs": food.carbs,
        "calories": food.calories,
        "quantity": food.quantity,
        "user": str(food.user_id) if food.user_id else None,
        "global": food.is_global,
    }
