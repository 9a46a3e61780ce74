"""Tests for nutrition aggregation."""

import itertools
from datetime import date

import pytest

from trainer_metrics.domain.nutrition import MealType, NutritionTotals
from trainer_metrics.services.nutrition import (
    aggregate,
    entries_for_date,
    goal_progress,
    group_by_meal_type,
    progress_ratio,
    select_active_goal,
    totals_by_meal_type,
)
from tests.conftest import TODAY, make_entry, make_food, make_goal


def test_aggregate_scales_per_100g_profiles() -> None:
    entries = [
        make_entry(make_food(50), 150),
        make_entry(make_food(80), 200),
    ]

    totals = aggregate(entries)

    assert totals.calories == 235


def test_aggregate_sums_every_macro() -> None:
    chicken = make_food(165, protein=31, carbs=0, fat=3.6, name="chicken")
    oats = make_food(389, protein=16.9, carbs=66.3, fat=6.9, fiber=10.6, name="oats")

    totals = aggregate([make_entry(chicken, 200), make_entry(oats, 50)])

    assert totals.calories == pytest.approx(330 + 194.5)
    assert totals.protein_g == pytest.approx(62 + 8.45)
    assert totals.carbs_g == pytest.approx(33.15)
    assert totals.fat_g == pytest.approx(7.2 + 3.45)
    assert totals.fiber_g == pytest.approx(5.3)


def test_aggregate_empty_is_all_zero() -> None:
    assert aggregate([]) == NutritionTotals(
        calories=0, protein_g=0, carbs_g=0, fat_g=0, fiber_g=0
    )


def test_aggregate_is_order_independent() -> None:
    entries = [
        make_entry(make_food(50, protein=10, carbs=5, fat=2, fiber=1), 150),
        make_entry(make_food(80, protein=4, carbs=12, fat=1), 200),
        make_entry(make_food(120, protein=20, carbs=0, fat=4, fiber=2), 50),
    ]
    expected = aggregate(entries)

    for permutation in itertools.permutations(entries):
        assert aggregate(permutation) == expected


def test_aggregate_does_not_round() -> None:
    totals = aggregate([make_entry(make_food(33.3), 10)])

    assert totals.calories == pytest.approx(3.33)


@pytest.mark.parametrize(
    ("consumed", "target", "expected"),
    [
        (235, 2000, 11.75),
        (150, 100, 100),
        (100, 100, 100),
        (0, 100, 0),
        (50, 0, 0),
        (50, -10, 0),
    ],
)
def test_progress_ratio(consumed: float, target: float, expected: float) -> None:
    assert progress_ratio(consumed, target) == pytest.approx(expected)


def test_group_by_meal_type_uses_entry_field() -> None:
    food = make_food(100)
    breakfast = make_entry(food, 100, MealType.BREAKFAST)
    dinner_one = make_entry(food, 120, MealType.DINNER)
    dinner_two = make_entry(food, 80, MealType.DINNER)

    groups = group_by_meal_type([dinner_one, breakfast, dinner_two])

    assert list(groups) == [
        MealType.BREAKFAST,
        MealType.LUNCH,
        MealType.SNACK,
        MealType.DINNER,
    ]
    assert groups[MealType.BREAKFAST] == [breakfast]
    assert groups[MealType.LUNCH] == []
    assert groups[MealType.DINNER] == [dinner_one, dinner_two]


def test_totals_by_meal_type() -> None:
    food = make_food(200, protein=10)
    totals = totals_by_meal_type(
        [
            make_entry(food, 50, MealType.SNACK),
            make_entry(food, 100, MealType.SNACK),
        ]
    )

    assert totals[MealType.SNACK].calories == 300
    assert totals[MealType.SNACK].protein_g == 15
    assert totals[MealType.BREAKFAST] == NutritionTotals()


def test_entries_for_date_filters_other_days() -> None:
    food = make_food(100)
    today = make_entry(food, 100)
    yesterday = make_entry(food, 100, meal_date=date(2024, 5, 9))

    assert entries_for_date([today, yesterday], TODAY) == [today]


def test_select_active_goal_respects_flag_and_range() -> None:
    inactive = make_goal(is_active=False)
    expired = make_goal(start_date=date(2024, 1, 1), end_date=date(2024, 4, 30))
    future = make_goal(start_date=date(2024, 6, 1))
    current = make_goal(start_date=date(2024, 5, 1), end_date=date(2024, 5, 10))

    assert select_active_goal([inactive, expired, future, current], TODAY) is current
    assert select_active_goal([inactive, expired, future], TODAY) is None
    assert select_active_goal([], TODAY) is None


def test_goal_progress_against_goal() -> None:
    totals = NutritionTotals(
        calories=235, protein_g=180, carbs_g=100, fat_g=30, fiber_g=15
    )

    progress = goal_progress(totals, make_goal())

    assert progress.has_goal
    assert progress.calories.percent == pytest.approx(11.75)
    assert progress.calories.remaining == 1765
    assert progress.protein.percent == 100
    assert progress.protein.remaining == -30
    assert progress.carbs.percent == 50
    assert progress.fiber is not None
    assert progress.fiber.percent == 50


def test_goal_progress_without_fiber_target() -> None:
    progress = goal_progress(
        NutritionTotals(fiber_g=20), make_goal(fiber_target_g=None)
    )

    assert progress.fiber is None


def test_goal_progress_without_goal_is_zero() -> None:
    progress = goal_progress(NutritionTotals(calories=1500), None)

    assert not progress.has_goal
    assert progress.calories.percent == 0
    assert progress.protein.percent == 0
    assert progress.fiber is None
