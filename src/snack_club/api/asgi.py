"""ASGI entrypoint for the snack club API."""

from snack_club.api.app import create_app
from snack_club.containers import build_container

app = create_app(build_container())
