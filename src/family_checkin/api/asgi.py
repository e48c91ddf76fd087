"""ASGI entrypoint for the family check-in tracker."""

from family_checkin.api.app import create_app
from family_checkin.containers import build_container

app = create_app(build_container())
