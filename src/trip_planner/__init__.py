"""School transport trip planning service."""
