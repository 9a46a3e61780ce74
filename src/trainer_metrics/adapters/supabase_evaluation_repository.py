"""Supabase repository for stored evaluations."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from trainer_metrics.domain.progress import EvaluationRecord
from trainer_metrics.services.progress import EvaluationRepository

_COLUMNS = (
    "id, student_id, evaluation_date, weight, body_fat_percentage, lean_mass, "
    "fat_weight, bmr, daily_calories, evaluation_method"
)


@dataclass
class SupabaseEvaluationRepository(EvaluationRepository):
    """Supabase implementation for evaluation history."""

    client: Client

    def list_evaluations(self, student_id: UUID, limit: int) -> list[EvaluationRecord]:
        """Return the most recent evaluations for a student."""
        response = (
            self.client.table("evaluations")
            .select(_COLUMNS)
            .eq("student_id", str(student_id))
            .order("evaluation_date", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> EvaluationRecord:
    return EvaluationRecord(
        evaluation_date=date.fromisoformat(str(row["evaluation_date"])[:10]),
        weight_kg=float(row.get("weight") or 0.0),
        body_fat_percent=_optional_float(row.get("body_fat_percentage")),
        lean_mass_kg=_optional_float(row.get("lean_mass")),
        fat_mass_kg=_optional_float(row.get("fat_weight")),
        bmr_kcal=_optional_float(row.get("bmr")),
        daily_calories_kcal=_optional_float(row.get("daily_calories")),
        method=row.get("evaluation_method"),
        id=UUID(str(row["id"])) if row.get("id") else None,
        student_id=UUID(str(row["student_id"])) if row.get("student_id") else None,
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
