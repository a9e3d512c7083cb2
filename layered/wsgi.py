"""WSGI entry point for the layered backend."""

import os

from layered.layered_app import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
