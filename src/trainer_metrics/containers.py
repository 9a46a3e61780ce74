"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from trainer_metrics.adapters.supabase_evaluation_repository import (
    SupabaseEvaluationRepository,
)
from trainer_metrics.adapters.supabase_meal_entry_repository import (
    SupabaseMealEntryRepository,
)
from trainer_metrics.adapters.supabase_nutrition_goal_repository import (
    SupabaseNutritionGoalRepository,
)
from trainer_metrics.adapters.supabase_roster_repository import SupabaseRosterRepository
from trainer_metrics.app_logging import configure_logging
from trainer_metrics.config import Settings, parse_log_level
from trainer_metrics.services.nutrition import NutritionDiaryService
from trainer_metrics.services.progress import (
    StudentProgressService,
    TrainerRosterService,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    progress_service: StudentProgressService
    nutrition_diary_service: NutritionDiaryService
    roster_service: TrainerRosterService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(parse_log_level(resolved_settings.log_level))
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    progress_service = StudentProgressService(
        repository=SupabaseEvaluationRepository(supabase_client),
        history_limit=resolved_settings.history_limit,
    )
    nutrition_diary_service = NutritionDiaryService(
        entry_repository=SupabaseMealEntryRepository(supabase_client),
        goal_repository=SupabaseNutritionGoalRepository(supabase_client),
    )
    roster_service = TrainerRosterService(
        repository=SupabaseRosterRepository(supabase_client),
        window_days=resolved_settings.due_evaluation_window_days,
    )
    return AppContainer(
        settings=resolved_settings,
        progress_service=progress_service,
        nutrition_diary_service=nutrition_diary_service,
        roster_service=roster_service,
    )
