"""ASGI entrypoint for the recipe builder API."""

from recipe_builder.api.app import create_app
from recipe_builder.containers import build_container

app = create_app(build_container())
