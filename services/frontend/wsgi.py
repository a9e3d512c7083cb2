"""WSGI entry point for frontend service."""

import os

from services.frontend.frontend_app import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
