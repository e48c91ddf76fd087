"""Dependency container wiring for the application."""

from dataclasses import dataclass
from zoneinfo import ZoneInfo

from supabase import ClientOptions, create_client

from family_checkin.adapters.supabase_auth_gateway import SupabaseAuthGateway
from family_checkin.adapters.supabase_checkin_repository import (
    SupabaseCheckinRepository,
)
from family_checkin.config import Settings, parse_timezone
from family_checkin.services.auth import AuthGateway
from family_checkin.services.checkins import CheckinService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    checkin_service: CheckinService
    auth_gateway: AuthGateway
    display_timezone: ZoneInfo


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    data_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    auth_client = create_client(
        resolved_settings.supabase_url,
        resolved_settings.supabase_anon_key,
        options=ClientOptions(persist_session=False, auto_refresh_token=False),
    )
    checkin_service = CheckinService(SupabaseCheckinRepository(data_client))
    auth_gateway = SupabaseAuthGateway(auth_client)

    return AppContainer(
        settings=resolved_settings,
        checkin_service=checkin_service,
        auth_gateway=auth_gateway,
        display_timezone=parse_timezone(resolved_settings.display_timezone),
    )
