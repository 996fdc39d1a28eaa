"""ASGI entrypoint for the health tracker API."""

from healthy_track.api.app import create_app
from healthy_track.containers import build_container

app = create_app(build_container())
