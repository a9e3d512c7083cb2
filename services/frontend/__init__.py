"""Frontend service."""
