"""Blueprints exposed by the payroll API."""

from flask import Flask

from .calculations import blueprint as calculations_blueprint
from .config import blueprint as config_blueprint

BLUEPRINTS = (calculations_blueprint, config_blueprint)


def register_routes(app: Flask) -> None:
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)
