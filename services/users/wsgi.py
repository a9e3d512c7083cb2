"""WSGI entry point for users service."""

import os

from services.users.users_app import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
