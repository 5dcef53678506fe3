"""ASGI entrypoint for the MealVista recipe API."""

from mealvista.api.app import create_app
from mealvista.containers import build_container

app = create_app(build_container())
