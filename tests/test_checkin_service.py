"""Tests for the check-in service."""

from datetime import UTC, datetime
from uuid import uuid4

from family_checkin.domain.checkins import Mood
from family_checkin.domain.sessions import AuthUser
from family_checkin.services.checkins import CheckinService
from tests.conftest import InMemoryCheckinRepository, make_record


def test_record_checkin_attaches_signed_in_user() -> None:
    repository = InMemoryCheckinRepository()
    service = CheckinService(repository)
    user = AuthUser(id=uuid4(), email="sam@example.com")

    record = service.record_checkin(
        parent_name="  Mom ",
        mood=Mood.GOOD,
        notes="  Had lunch with friends ",
        user=user,
    )

    assert record.user_id == user.id
    assert record.parent_name == "Mom"
    assert record.mood == "good"
    assert record.notes == "Had lunch with friends"
    assert len(repository.inserts) == 1


def test_record_checkin_without_user_is_orphaned() -> None:
    repository = InMemoryCheckinRepository()
    service = CheckinService(repository)

    record = service.record_checkin(
        parent_name="Dad", mood=Mood.OKAY, notes="", user=None
    )

    assert record.user_id is None
    assert record.notes is None


def test_list_for_user_returns_only_owned_records_newest_first() -> None:
    owner = uuid4()
    older = make_record(datetime(2024, 1, 10, 8, 0, tzinfo=UTC), user_id=owner)
    newer = make_record(datetime(2024, 1, 12, 8, 0, tzinfo=UTC), user_id=owner)
    other = make_record(datetime(2024, 1, 11, 8, 0, tzinfo=UTC), user_id=uuid4())
    service = CheckinService(InMemoryCheckinRepository(records=[older, other, newer]))

    assert service.list_for_user(owner) == [newer, older]
    assert service.list_history(owner) == [newer, older]


def test_list_for_user_with_no_records_is_empty() -> None:
    service = CheckinService(InMemoryCheckinRepository())

    assert service.list_for_user(uuid4()) == []
