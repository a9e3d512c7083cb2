"""WSGI entry point for the monolith backend."""

import os

from app import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
