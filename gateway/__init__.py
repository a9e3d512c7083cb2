"""API gateway for the microservices variant."""
