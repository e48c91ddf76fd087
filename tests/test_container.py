"""Tests for container wiring."""

from zoneinfo import ZoneInfo

from family_checkin.adapters.supabase_auth_gateway import SupabaseAuthGateway
from family_checkin.config import Settings, parse_timezone
from family_checkin.containers import build_container


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.checkin_service is not None
    assert isinstance(container.auth_gateway, SupabaseAuthGateway)
    assert container.display_timezone == ZoneInfo("UTC")


def test_build_container_uses_display_timezone(settings: Settings) -> None:
    settings.display_timezone = "America/New_York"

    container = build_container(settings)

    assert container.display_timezone == ZoneInfo("America/New_York")


def test_parse_timezone_falls_back_to_utc() -> None:
    assert parse_timezone("Not/AZone") == ZoneInfo("UTC")
    assert parse_timezone("") == ZoneInfo("UTC")
    assert parse_timezone(None) == ZoneInfo("UTC")


def test_secure_cookies_outside_local(settings: Settings) -> None:
    assert settings.secure_cookies is False

    settings.environment = "production"

    assert settings.secure_cookies is True
