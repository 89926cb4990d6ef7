"""API module for videocalls.

API layer:
- Validates inputs, reads/writes DB through the repository
- Translates failures into HTTP status codes and messages
- Forbidden: direct provider HTTP calls
"""
