"""ASGI entrypoint for the nutrilog API."""

from nutrilog.api.app import create_app
from nutrilog.containers import build_container

app = create_app(build_container())
