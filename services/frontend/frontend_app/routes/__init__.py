"""Route blueprints for the frontend service."""
