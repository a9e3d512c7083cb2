"""Layered backend: controller, service and repository layers in one process."""
