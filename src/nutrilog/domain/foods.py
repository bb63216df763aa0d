"""Domain models for the food catalog."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class FoodCategory(StrEnum):
    """Closed set of catalog categories."""

    FRUIT = "Fruit"
    VEGETABLES = "Vegetables"
    GRAINS = "Grains"
    PROTEINS = "Proteins"
    DAIRY = "Dairy"
    BEVERAGES = "Beverages"
    PREPARED_FOODS = "Prepared Foods"
    OTHERS = "others"


class FoodInput(BaseModel):
    """Payload for adding a food to the catalog."""

    model_config = ConfigDict(allow_inf_nan=False)

    category: FoodCategory
    name: str = Field(min_length=1)
    protein: float = Field(ge=0)
    fat: float = Field(ge=0)
    carbs: float = Field(ge=0)
    calories: float = Field(ge=0)
    quantity: str


@dataclass(frozen=True)
class FoodItem:
    """A catalog entry, owned by a user or shared globally."""

    id: UUID
    category: FoodCategory
    name: str
    protein: float
    fat: float
    carbs: float
    calories: float
    quantity: str
    user_id: UUID | None
    is_global: bool
