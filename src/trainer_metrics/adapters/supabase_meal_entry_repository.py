"""Supabase repository for logged meal entries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from trainer_metrics.domain.nutrition import FoodItem, MealEntry, MealType
from trainer_metrics.services.nutrition import MealEntryRepository

_COLUMNS = (
    "id, meal_date, meal_type, quantity_grams, "
    "food_items(id, name, calories_per_100g, protein_per_100g, carbs_per_100g, "
    "fat_per_100g, fiber_per_100g)"
)
_MEAL_TYPES = {meal_type.value: meal_type for meal_type in MealType}


@dataclass
class SupabaseMealEntryRepository(MealEntryRepository):
    """Supabase implementation for meal entries joined with food items."""

    client: Client

    def list_entries(self, student_id: UUID, day: date) -> list[MealEntry]:
        """Return a student's entries for a day."""
        response = (
            self.client.table("meal_entries")
            .select(_COLUMNS)
            .eq("student_id", str(student_id))
            .eq("meal_date", day.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> MealEntry:
    food = row.get("food_items") or {}
    return MealEntry(
        id=UUID(str(row["id"])) if row.get("id") else None,
        food_item=_parse_food(food),
        quantity_grams=float(row.get("quantity_grams") or 0.0),
        meal_type=_parse_meal_type(row),
        meal_date=date.fromisoformat(str(row["meal_date"])[:10]),
    )


def _parse_meal_type(row: dict[str, object]) -> MealType:
    raw = row.get("meal_type")
    if raw not in _MEAL_TYPES:
        raise ValueError(f"Meal entry {row.get('id')} has invalid meal_type {raw!r}")
    return _MEAL_TYPES[raw]


def _parse_food(food: dict[str, object]) -> FoodItem:
    fiber = food.get("fiber_per_100g")
    return FoodItem(
        id=UUID(str(food["id"])) if food.get("id") else None,
        name=str(food.get("name") or ""),
        calories_per_100g=float(food.get("calories_per_100g") or 0.0),
        protein_per_100g=float(food.get("protein_per_100g") or 0.0),
        carbs_per_100g=float(food.get("carbs_per_100g") or 0.0),
        fat_per_100g=float(food.get("fat_per_100g") or 0.0),
        fiber_per_100g=float(fiber) if fiber is not None else None,
    )
