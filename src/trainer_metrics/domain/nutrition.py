"""Nutrition domain models."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from uuid import UUID


class MealType(Enum):
    """Meal slots, declared in display order."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    SNACK = "snack"
    DINNER = "dinner"


@dataclass(frozen=True)
class FoodItem:
    """Nutritional profile per 100 g of a catalog food."""

    calories_per_100g: float
    protein_per_100g: float
    carbs_per_100g: float
    fat_per_100g: float
    fiber_per_100g: float | None = None
    id: UUID | None = None
    name: str = ""


@dataclass(frozen=True)
class MealEntry:
    """A logged consumption of a food item."""

    food_item: FoodItem
    quantity_grams: float
    meal_type: MealType
    meal_date: date
    id: UUID | None = None


@dataclass(frozen=True)
class NutritionGoal:
    """Daily macro targets for a student."""

    calories_target: float
    protein_target_g: float
    carbs_target_g: float
    fat_target_g: float
    start_date: date
    fiber_target_g: float | None = None
    end_date: date | None = None
    is_active: bool = True
    id: UUID | None = None


@dataclass(frozen=True)
class NutritionTotals:
    """Summed macros for a set of meal entries."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0


@dataclass(frozen=True)
class MacroProgress:
    """Progress of one macro against its target."""

    consumed: float
    target: float
    percent: float
    remaining: float


_NO_PROGRESS = MacroProgress(consumed=0.0, target=0.0, percent=0.0, remaining=0.0)


@dataclass(frozen=True)
class NutritionProgress:
    """Progress of daily totals against the active goal."""

    calories: MacroProgress
    protein: MacroProgress
    carbs: MacroProgress
    fat: MacroProgress
    fiber: MacroProgress | None = None
    has_goal: bool = True

    @classmethod
    def empty(cls) -> "NutritionProgress":
        """Return the zero-progress result used when no goal is active."""
        return cls(
            calories=_NO_PROGRESS,
            protein=_NO_PROGRESS,
            carbs=_NO_PROGRESS,
            fat=_NO_PROGRESS,
            fiber=None,
            has_goal=False,
        )


@dataclass(frozen=True)
class DailyNutrition:
    """Everything the nutrition screen shows for one day."""

    day: date
    entries: list[MealEntry]
    totals: NutritionTotals
    by_meal: dict[MealType, list[MealEntry]] = field(default_factory=dict)
    meal_totals: dict[MealType, NutritionTotals] = field(default_factory=dict)
    progress: NutritionProgress = field(default_factory=NutritionProgress.empty)
