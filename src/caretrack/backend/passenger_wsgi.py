"""WSGI entrypoint for deploying the CareTrack analytics backend behind Passenger."""

from caretrack.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
