"""ASGI entrypoint for the weight planner API."""

from weight_planner.api.app import create_app
from weight_planner.containers import build_container

app = create_app(build_container())
