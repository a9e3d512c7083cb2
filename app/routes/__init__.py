"""
Routes package for the monolith backend.

This package contains the route blueprint:
- api: REST API endpoints returning traced JSON envelopes
"""
