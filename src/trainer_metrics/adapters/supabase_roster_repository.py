"""Supabase repository for a trainer's student roster."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from trainer_metrics.services.progress import RosterRepository


@dataclass
class SupabaseRosterRepository(RosterRepository):
    """Supabase implementation for roster evaluation dates."""

    client: Client

    def list_evaluation_dates(self, trainer_id: UUID) -> dict[UUID, list[date]]:
        """Return each student's evaluation dates for a trainer."""
        response = (
            self.client.table("students")
            .select("id, evaluations(evaluation_date)")
            .eq("trainer_id", str(trainer_id))
            .execute()
        )
        roster: dict[UUID, list[date]] = {}
        for row in response.data or []:
            evaluations = row.get("evaluations") or []
            roster[UUID(str(row["id"]))] = [
                date.fromisoformat(str(item["evaluation_date"])[:10])
                for item in evaluations
                if item.get("evaluation_date")
            ]
        return roster
