"""Student transport fee service."""
