"""ASGI entrypoint for the nutrICU API."""

from nutricu.api.app import create_app
from nutricu.containers import build_container

app = create_app(build_container())
