"""Nutrition aggregation over logged meal entries."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from trainer_metrics.domain.nutrition import (
    DailyNutrition,
    MacroProgress,
    MealEntry,
    MealType,
    NutritionGoal,
    NutritionProgress,
    NutritionTotals,
)

_logger = logging.getLogger(__name__)


class MealEntryRepository(Protocol):
    """Read interface for logged meal entries."""

    def list_entries(self, student_id: UUID, day: date) -> list[MealEntry]:
        """Return entries for a student on a day, food items resolved."""


class NutritionGoalRepository(Protocol):
    """Read interface for nutrition goals."""

    def list_goals(self, student_id: UUID) -> list[NutritionGoal]:
        """Return the student's goals."""


@dataclass
class NutritionDiaryService:
    """Service assembling a student's daily nutrition view."""

    entry_repository: MealEntryRepository
    goal_repository: NutritionGoalRepository

    def get_day(self, student_id: UUID, day: date) -> DailyNutrition:
        """Return totals, per-meal breakdown and goal progress for a day."""
        entries = entries_for_date(
            self.entry_repository.list_entries(student_id, day), day
        )
        goal = select_active_goal(self.goal_repository.list_goals(student_id), day)
        if goal is None:
            _logger.debug(
                "No active nutrition goal: student=%s day=%s", student_id, day
            )
        totals = aggregate(entries)
        by_meal = group_by_meal_type(entries)
        return DailyNutrition(
            day=day,
            entries=entries,
            totals=totals,
            by_meal=by_meal,
            meal_totals=totals_by_meal_type(entries),
            progress=goal_progress(totals, goal),
        )


def aggregate(entries: Iterable[MealEntry]) -> NutritionTotals:
    """Sum macros over entries, scaling each food's per-100 g profile.

    Values are left unrounded so progress ratios stay precise.
    """
    calories = protein = carbs = fat = fiber = 0.0
    for entry in entries:
        food = entry.food_item
        multiplier = entry.quantity_grams / 100
        calories += food.calories_per_100g * multiplier
        protein += food.protein_per_100g * multiplier
        carbs += food.carbs_per_100g * multiplier
        fat += food.fat_per_100g * multiplier
        fiber += (food.fiber_per_100g or 0.0) * multiplier
    return NutritionTotals(
        calories=calories,
        protein_g=protein,
        carbs_g=carbs,
        fat_g=fat,
        fiber_g=fiber,
    )


def progress_ratio(consumed: float, target: float) -> float:
    """Return consumption as a percentage of target, capped at 100."""
    if target <= 0:
        return 0.0
    return min(consumed / target * 100, 100.0)


def group_by_meal_type(
    entries: Iterable[MealEntry],
) -> dict[MealType, list[MealEntry]]:
    """Partition entries by their meal type, keeping every meal slot."""
    groups: dict[MealType, list[MealEntry]] = {meal: [] for meal in MealType}
    for entry in entries:
        groups[MealType(entry.meal_type)].append(entry)
    return groups


def totals_by_meal_type(
    entries: Iterable[MealEntry],
) -> dict[MealType, NutritionTotals]:
    """Return aggregated totals for each meal slot."""
    return {
        meal: aggregate(items) for meal, items in group_by_meal_type(entries).items()
    }


def entries_for_date(entries: Iterable[MealEntry], day: date) -> list[MealEntry]:
    """Return the entries logged on a given day."""
    return [entry for entry in entries if entry.meal_date == day]


def select_active_goal(
    goals: Iterable[NutritionGoal], day: date
) -> NutritionGoal | None:
    """Return the first active goal whose date range covers the day."""
    for goal in goals:
        if not goal.is_active:
            continue
        if goal.start_date > day:
            continue
        if goal.end_date is not None and goal.end_date < day:
            continue
        return goal
    return None


def goal_progress(
    totals: NutritionTotals, goal: NutritionGoal | None
) -> NutritionProgress:
    """Compare totals against a goal; no goal yields an explicit empty result."""
    if goal is None:
        return NutritionProgress.empty()
    fiber = None
    if goal.fiber_target_g is not None:
        fiber = _macro_progress(totals.fiber_g, goal.fiber_target_g)
    return NutritionProgress(
        calories=_macro_progress(totals.calories, goal.calories_target),
        protein=_macro_progress(totals.protein_g, goal.protein_target_g),
        carbs=_macro_progress(totals.carbs_g, goal.carbs_target_g),
        fat=_macro_progress(totals.fat_g, goal.fat_target_g),
        fiber=fiber,
    )


def _macro_progress(consumed: float, target: float) -> MacroProgress:
    return MacroProgress(
        consumed=consumed,
        target=target,
        percent=progress_ratio(consumed, target),
        remaining=target - consumed,
    )
