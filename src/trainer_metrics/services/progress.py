"""Progress series and summaries over evaluation history."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from trainer_metrics.domain.progress import (
    EvaluationRecord,
    ProgressReport,
    ProgressSummary,
    RosterStats,
    SeriesDelta,
    SeriesPoint,
)
from trainer_metrics.services.body_composition import round_half_up

DUE_EVALUATION_WINDOW_DAYS = 30


class EvaluationRepository(Protocol):
    """Read interface for stored evaluations."""

    def list_evaluations(self, student_id: UUID, limit: int) -> list[EvaluationRecord]:
        """Return up to ``limit`` evaluations for a student."""


class RosterRepository(Protocol):
    """Read interface for a trainer's students and their evaluation dates."""

    def list_evaluation_dates(self, trainer_id: UUID) -> dict[UUID, list[date]]:
        """Return evaluation dates keyed by student, including students without any."""


@dataclass
class StudentProgressService:
    """Service for a student's evaluation history."""

    repository: EvaluationRepository
    history_limit: int = 100

    def get_series(self, student_id: UUID) -> list[SeriesPoint]:
        """Return the chronological chart series."""
        return build_series(self._evaluations(student_id))

    def get_report(self, student_id: UUID) -> ProgressReport:
        """Return series, deltas and summary."""
        records = self._evaluations(student_id)
        series = build_series(records)
        return ProgressReport(
            series=series,
            deltas=series_deltas(series),
            summary=summarize_progress(records),
        )

    def latest_evaluation(self, student_id: UUID) -> EvaluationRecord | None:
        """Return the most recent evaluation, if any."""
        records = _chronological(self._evaluations(student_id))
        return records[-1] if records else None

    def _evaluations(self, student_id: UUID) -> list[EvaluationRecord]:
        return self.repository.list_evaluations(student_id, self.history_limit)


@dataclass
class TrainerRosterService:
    """Service for trainer dashboard statistics."""

    repository: RosterRepository
    window_days: int = DUE_EVALUATION_WINDOW_DAYS

    def get_stats(self, trainer_id: UUID, today: date) -> RosterStats:
        """Return roster statistics as of a day."""
        return roster_stats(
            self.repository.list_evaluation_dates(trainer_id),
            today,
            window_days=self.window_days,
        )


def build_series(records: Iterable[EvaluationRecord]) -> list[SeriesPoint]:
    """Return chart points in ascending date order.

    Stored derived values are used as-is; evaluations are never recomputed
    because earlier records may come from a different measurement method.
    Records sharing a date keep their input order.
    """
    return [
        SeriesPoint(
            day=record.evaluation_date,
            weight_kg=record.weight_kg,
            body_fat_percent=record.body_fat_percent,
            lean_mass_kg=record.lean_mass_kg,
        )
        for record in _chronological(records)
    ]


def series_deltas(points: list[SeriesPoint]) -> list[SeriesDelta]:
    """Return per-point changes since the first and the previous point."""
    if not points:
        return []
    first = points[0]
    deltas = []
    previous = first
    for point in points:
        deltas.append(
            SeriesDelta(
                day=point.day,
                weight_since_first_kg=point.weight_kg - first.weight_kg,
                weight_since_previous_kg=point.weight_kg - previous.weight_kg,
                body_fat_since_first=_difference(
                    point.body_fat_percent, first.body_fat_percent
                ),
                body_fat_since_previous=_difference(
                    point.body_fat_percent, previous.body_fat_percent
                ),
                lean_mass_since_first_kg=_difference(
                    point.lean_mass_kg, first.lean_mass_kg
                ),
                lean_mass_since_previous_kg=_difference(
                    point.lean_mass_kg, previous.lean_mass_kg
                ),
            )
        )
        previous = point
    return deltas


def summarize_progress(records: Iterable[EvaluationRecord]) -> ProgressSummary:
    """Return averages and the overall weight change across evaluations."""
    ordered = _chronological(records)
    if not ordered:
        return ProgressSummary(
            evaluation_count=0,
            avg_body_fat_percent=0.0,
            avg_lean_mass_kg=0.0,
            total_weight_change_kg=0.0,
            first_date=None,
            last_date=None,
        )

    count = len(ordered)
    # Missing derived values count as zero in the averages.
    body_fat_total = sum(record.body_fat_percent or 0.0 for record in ordered)
    lean_mass_total = sum(record.lean_mass_kg or 0.0 for record in ordered)
    weight_change = ordered[-1].weight_kg - ordered[0].weight_kg if count > 1 else 0.0
    return ProgressSummary(
        evaluation_count=count,
        avg_body_fat_percent=body_fat_total / count,
        avg_lean_mass_kg=lean_mass_total / count,
        total_weight_change_kg=weight_change,
        first_date=ordered[0].evaluation_date,
        last_date=ordered[-1].evaluation_date,
    )


def roster_stats(
    evaluation_dates: Mapping[UUID, Iterable[date]],
    today: date,
    window_days: int = DUE_EVALUATION_WINDOW_DAYS,
) -> RosterStats:
    """Return trainer-level counts from each student's evaluation dates.

    A student counts as progressing with more than one evaluation and as due
    when no evaluation falls inside the trailing window.
    """
    cutoff = today - timedelta(days=window_days)
    total_students = len(evaluation_dates)
    total_evaluations = 0
    progressing = 0
    recent = 0
    for dates in evaluation_dates.values():
        student_dates = list(dates)
        total_evaluations += len(student_dates)
        if len(student_dates) > 1:
            progressing += 1
        if any(day >= cutoff for day in student_dates):
            recent += 1

    progress_rate = (
        int(round_half_up(progressing / total_students * 100)) if total_students else 0
    )
    return RosterStats(
        total_students=total_students,
        total_evaluations=total_evaluations,
        progress_rate_percent=progress_rate,
        due_evaluations=max(0, total_students - recent),
    )


def _chronological(records: Iterable[EvaluationRecord]) -> list[EvaluationRecord]:
    return sorted(records, key=lambda record: record.evaluation_date)


def _difference(current: float | None, reference: float | None) -> float | None:
    if current is None or reference is None:
        return None
    return current - reference
