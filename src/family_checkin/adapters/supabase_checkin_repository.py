"""Supabase repository for check-ins."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from family_checkin.domain.checkins import CheckinRecord, NewCheckin
from family_checkin.services.checkins import CheckinRepository, CheckinStoreError

CHECKINS_TABLE = "checkins"


@dataclass
class SupabaseCheckinRepository(CheckinRepository):
    """Supabase implementation for check-in records."""

    client: Client

    def insert(self, checkin: NewCheckin) -> CheckinRecord:
        """Insert a check-in row and return it as stored."""
        response = (
            self.client.table(CHECKINS_TABLE)
            .insert(
                {
                    "parent_name": checkin.parent_name,
                    "mood": checkin.mood.value,
                    "notes": checkin.notes,
                    "user_id": str(checkin.user_id) if checkin.user_id else None,
                }
            )
            .execute()
        )
        if not response.data:
            raise CheckinStoreError("Failed to create check-in")
        return _parse_row(response.data[0])

    def list_checkins(self, owner_id: UUID | None = None) -> list[CheckinRecord]:
        """Return check-ins newest first, filtered by owner when given."""
        query = self.client.table(CHECKINS_TABLE).select(
            "id, user_id, parent_name, mood, notes, created_at"
        )
        if owner_id is not None:
            query = query.eq("user_id", str(owner_id))
        response = query.order("created_at", desc=True).execute()
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> CheckinRecord:
    user_id = row.get("user_id")
    notes = row.get("notes")
    return CheckinRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(user_id)) if user_id else None,
        parent_name=str(row.get("parent_name") or ""),
        mood=str(row.get("mood") or ""),
        notes=str(notes) if notes else None,
        created_at=_parse_timestamp(row.get("created_at")),
    )


def _parse_timestamp(raw: object) -> datetime:
    if not isinstance(raw, str) or not raw:
        return datetime.fromtimestamp(0, tz=UTC)
    value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value
