"""Database layer for videocalls."""
