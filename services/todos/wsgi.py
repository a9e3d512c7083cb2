"""WSGI entry point for todos service."""

import os

from services.todos.todos_app import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
