"""Tests for container wiring."""

from trainer_metrics.adapters.supabase_evaluation_repository import (
    SupabaseEvaluationRepository,
)
from trainer_metrics.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.progress_service is not None
    assert container.nutrition_diary_service is not None
    assert container.roster_service.window_days == 30
    assert container.progress_service.history_limit == 100
    assert isinstance(
        container.progress_service.repository, SupabaseEvaluationRepository
    )
