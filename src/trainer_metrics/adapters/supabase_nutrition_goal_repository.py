"""Supabase repository for nutrition goals."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from trainer_metrics.domain.nutrition import NutritionGoal
from trainer_metrics.services.nutrition import NutritionGoalRepository


@dataclass
class SupabaseNutritionGoalRepository(NutritionGoalRepository):
    """Supabase implementation for nutrition goals."""

    client: Client

    def list_goals(self, student_id: UUID) -> list[NutritionGoal]:
        """Return a student's goals, newest first."""
        response = (
            self.client.table("nutrition_goals")
            .select(
                "id, calories, protein, carbs, fat, fiber, is_active, "
                "start_date, end_date"
            )
            .eq("student_id", str(student_id))
            .order("start_date", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> NutritionGoal:
    fiber = row.get("fiber")
    end_date = row.get("end_date")
    return NutritionGoal(
        id=UUID(str(row["id"])) if row.get("id") else None,
        calories_target=float(row.get("calories") or 0.0),
        protein_target_g=float(row.get("protein") or 0.0),
        carbs_target_g=float(row.get("carbs") or 0.0),
        fat_target_g=float(row.get("fat") or 0.0),
        fiber_target_g=float(fiber) if fiber is not None else None,
        is_active=bool(row.get("is_active")),
        start_date=date.fromisoformat(str(row["start_date"])[:10]),
        end_date=date.fromisoformat(str(end_date)[:10]) if end_date else None,
    )
