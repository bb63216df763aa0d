"""Daily nutrition records and the accumulator that merges entries into them."""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

# JSON numbers only; booleans and numeric strings are rejected.
MacroDelta = Annotated[float, Field(strict=True)]


@dataclass(frozen=True)
class MacroTotals:
    """Calorie and macronutrient amounts."""

    calories: float = 0.0
    proteins: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0

    def __add__(self, other: "MacroTotals") -> "MacroTotals":
        return MacroTotals(
            calories=self.calories + other.calories,
            proteins=self.proteins + other.proteins,
            carbs=self.carbs + other.carbs,
            fats=self.fats + other.fats,
        )


@dataclass(frozen=True)
class CategoryTotals:
    """Running totals for one food category on one day."""

    name: str
    totals: MacroTotals


@dataclass(frozen=True)
class DailyNutrition:
    """Running totals for one calendar day, broken down by category."""

    day: date
    totals: MacroTotals
    categories: tuple[CategoryTotals, ...]


class NutritionEntry(BaseModel):
    """A single nutrition submission; macro values are deltas to add."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    day: date = Field(alias="date")
    category: str = Field(min_length=1)
    calories: MacroDelta
    proteins: MacroDelta
    carbs: MacroDelta
    fats: MacroDelta

    @field_validator("day", mode="before")
    @classmethod
    def _calendar_day(cls, value: object) -> object:
        """Drop any time-of-day component so entries coalesce per date."""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str):
            return datetime.fromisoformat(value.strip()).date()
        return value

    def macros(self) -> MacroTotals:
        """Return the entry's deltas as macro totals."""
        return MacroTotals(
            calories=self.calories,
            proteins=self.proteins,
            carbs=self.carbs,
            fats=self.fats,
        )


def accumulate(
    history: Sequence[DailyNutrition], entry: NutritionEntry
) -> list[DailyNutrition]:
    """Return a new history with the entry merged in.

    The record for the entry's day gets the deltas added to its totals and to
    the matching category, appending the category when it is new. A day with
    no record yet is appended at the end. Order is otherwise preserved.
    """
    delta = entry.macros()
    updated: list[DailyNutrition] = []
    merged = False
    for record in history:
        if not merged and record.day == entry.day:
            updated.append(_merge_day(record, entry.category, delta))
            merged = True
        else:
            updated.append(record)
    if not merged:
        updated.append(
            DailyNutrition(
                day=entry.day,
                totals=delta,
                categories=(CategoryTotals(name=entry.category, totals=delta),),
            )
        )
    return updated


def _merge_day(
    record: DailyNutrition, category: str, delta: MacroTotals
) -> DailyNutrition:
    categories = list(record.categories)
    for index, existing in enumerate(categories):
        if existing.name == category:
            categories[index] = replace(existing, totals=existing.totals + delta)
            break
    else:
        categories.append(CategoryTotals(name=category, totals=delta))
    return DailyNutrition(
        day=record.day,
        totals=record.totals + delta,
        categories=tuple(categories),
    )


def daily_nutrition_to_dict(record: DailyNutrition) -> dict[str, object]:
    """Serialize a daily record to its document form."""
    return {
        "date": record.day.isoformat(),
        "totalCalories": _number(record.totals.calories),
        "totalProteins": _number(record.totals.proteins),
        "totalCarbs": _number(record.totals.carbs),
        "totalFats": _number(record.totals.fats),
        "categories": [
            {
                "name": category.name,
                "calories": _number(category.totals.calories),
                "proteins": _number(category.totals.proteins),
                "carbs": _number(category.totals.carbs),
                "fats": _number(category.totals.fats),
            }
            for category in record.categories
        ],
    }


def _number(value: float) -> float | int:
    """Whole amounts are written as integers."""
    return int(value) if float(value).is_integer() else value


def daily_nutrition_from_dict(raw: dict[str, object]) -> DailyNutrition:
    """Parse a daily record from its document form."""
    raw_day = str(raw["date"])
    categories = tuple(
        CategoryTotals(
            name=str(item.get("name", "")),
            totals=MacroTotals(
                calories=float(item.get("calories", 0.0)),
                proteins=float(item.get("proteins", 0.0)),
                carbs=float(item.get("carbs", 0.0)),
                fats=float(item.get("fats", 0.0)),
            ),
        )
        for item in raw.get("categories") or []
    )
    return DailyNutrition(
        day=datetime.fromisoformat(raw_day).date(),
        totals=MacroTotals(
            calories=float(raw.get("totalCalories", 0.0)),
            proteins=float(raw.get("totalProteins", 0.0)),
            carbs=float(raw.get("totalCarbs", 0.0)),
            fats=float(raw.get("totalFats", 0.0)),
        ),
        categories=categories,
    )
