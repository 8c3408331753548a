"""ASGI entrypoint for the PawFuel API."""

from pawfuel.api.app import create_app
from pawfuel.containers import build_container

app = create_app(build_container())
