"""Domain and API models."""
