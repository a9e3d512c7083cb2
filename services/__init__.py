"""Microservices variant: users service, todos service and frontend."""
