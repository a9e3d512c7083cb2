"""Route blueprints for the users service."""
