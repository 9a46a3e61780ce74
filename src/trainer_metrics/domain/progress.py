"""Domain models for evaluation history and progress."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class EvaluationRecord:
    """Stored evaluation with previously derived values."""

    evaluation_date: date
    weight_kg: float
    body_fat_percent: float | None = None
    lean_mass_kg: float | None = None
    fat_mass_kg: float | None = None
    bmr_kcal: float | None = None
    daily_calories_kcal: float | None = None
    method: str | None = None
    id: UUID | None = None
    student_id: UUID | None = None


@dataclass(frozen=True)
class SeriesPoint:
    """One chart point."""

    day: date
    weight_kg: float
    body_fat_percent: float | None
    lean_mass_kg: float | None


@dataclass(frozen=True)
class SeriesDelta:
    """Change of each metric since the first and previous points."""

    day: date
    weight_since_first_kg: float
    weight_since_previous_kg: float
    body_fat_since_first: float | None
    body_fat_since_previous: float | None
    lean_mass_since_first_kg: float | None
    lean_mass_since_previous_kg: float | None


@dataclass(frozen=True)
class ProgressSummary:
    """Aggregate view over a student's evaluations."""

    evaluation_count: int
    avg_body_fat_percent: float
    avg_lean_mass_kg: float
    total_weight_change_kg: float
    first_date: date | None
    last_date: date | None


@dataclass(frozen=True)
class ProgressReport:
    """Series, deltas and summary for one student."""

    series: list[SeriesPoint]
    deltas: list[SeriesDelta]
    summary: ProgressSummary


@dataclass(frozen=True)
class RosterStats:
    """Trainer-level evaluation statistics."""

    total_students: int
    total_evaluations: int
    progress_rate_percent: int
    due_evaluations: int
