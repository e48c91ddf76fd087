"""Check-in persistence service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from family_checkin.domain.checkins import CheckinRecord, Mood, NewCheckin
from family_checkin.domain.sessions import AuthUser

logger = logging.getLogger(__name__)


class CheckinStoreError(RuntimeError):
    """Raised when the record store doesn't confirm a write."""


class CheckinRepository(Protocol):
    """Persistence interface for check-in records."""

    def insert(self, checkin: NewCheckin) -> CheckinRecord:
        """Store a check-in and return the stored record."""

    def list_checkins(self, owner_id: UUID | None = None) -> list[CheckinRecord]:
        """Return check-ins newest first, optionally filtered by owner."""


@dataclass
class CheckinService:
    """Application service for recording and listing check-ins."""

    repository: CheckinRepository

    def record_checkin(
        self,
        parent_name: str,
        mood: Mood,
        notes: str | None,
        user: AuthUser | None,
    ) -> CheckinRecord:
        """Store a new check-in, owned by ``user`` when one is signed in."""
        cleaned_notes = notes.strip() if notes else ""
        checkin = NewCheckin(
            parent_name=parent_name.strip(),
            mood=mood,
            notes=cleaned_notes or None,
            user_id=user.id if user else None,
        )
        if checkin.user_id is None:
            logger.warning(
                "Recording check-in without a signed-in user",
                extra={"parent_name": checkin.parent_name},
            )
        record = self.repository.insert(checkin)
        logger.info("Check-in saved", extra={"checkin_id": str(record.id)})
        return record

    def list_for_user(self, user_id: UUID) -> list[CheckinRecord]:
        """Return the user's check-ins, newest first."""
        return self.repository.list_checkins(owner_id=user_id)

    def list_history(self, user_id: UUID) -> list[CheckinRecord]:
        """Return the history list for the signed-in user."""
        return self.list_for_user(user_id)
