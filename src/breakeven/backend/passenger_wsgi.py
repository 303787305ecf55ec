"""WSGI entrypoint for deploying the breakeven backend behind Passenger."""

from breakeven.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
