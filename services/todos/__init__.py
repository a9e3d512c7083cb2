"""Todos service."""
