"""videocalls: video details lookups with a persisted call log."""

__version__ = "0.1.0"
