"""ASGI entrypoint for the photo shoot studio."""

from photoshoot.api.app import create_app
from photoshoot.containers import build_container

app = create_app(build_container())
