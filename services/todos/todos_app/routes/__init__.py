"""Route blueprints for the todos service."""
