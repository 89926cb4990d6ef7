"""Database schema for videocalls.

One table, api_calls, holding every attempt to fetch video details.
Many rows per video_id are expected; video_id is indexed but not unique.
"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import JSON, DateTime, Integer, Interval, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class ApiCall(Base):
    """Record of one call to the provider's video details endpoint."""

    __tablename__ = "api_calls"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    ctime: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    called: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    video_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    taken: Mapped[timedelta] = mapped_column(Interval, nullable=False, default=timedelta(0))
    error: Mapped[str] = mapped_column(Text, nullable=False, default="")
    result: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
