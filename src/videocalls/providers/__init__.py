"""Video provider adapters."""
