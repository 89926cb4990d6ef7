"""Domain models for videocalls.

Pure Python dataclasses, independent of SQLAlchemy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ApiCallEntity:
    """One attempt to fetch video details from the provider.

    id is assigned by storage on first insert; until then it is None.
    created_at is likewise only set when read back from storage.
    """

    video_id: str = ""
    id: int | None = None
    type: str = ""
    called_at: datetime = field(default_factory=_now)
    taken: timedelta = field(default_factory=timedelta)
    error: str = ""
    video: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    def exists(self) -> bool:
        """Whether this call has already been persisted."""
        return self.id is not None and self.id > 0
