"""Pydantic models for the videocalls API and provider payloads."""

from datetime import datetime, timedelta
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializerFunctionWrapHandler,
    field_serializer,
    field_validator,
    model_serializer,
)


class Video(BaseModel):
    """Video document returned by the provider's details endpoint.

    Only video_id is relied upon; every other field the provider sends is
    kept as-is. Dump with exclude_unset so the stored payload carries exactly
    the keys that were received, explicit nulls included.
    """

    model_config = ConfigDict(extra="allow")

    video_id: str
    state: str | None = None
    userdata: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    input: dict[str, Any] | None = None
    outputs: dict[str, Any] | None = None
    player: dict[str, Any] | None = None
    created_at: str | None = None
    updated_at: str | None = None


class DetailsRequest(BaseModel):
    """Body of POST /v1/details.

    Blank ids are rejected; any other id is passed on exactly as given.
    """

    video_id: str

    @field_validator("video_id")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("video_id must not be blank")
        return value


class MessageResponse(BaseModel):
    """Error body for rejected details requests."""

    message: str


class DetailsResponse(BaseModel):
    """Successful POST /v1/details response."""

    message: dict[str, Any]
    id: str


class ApiCallDetail(BaseModel):
    """Stored api call as reported by GET /v1/status.

    taken is serialized as float seconds.
    """

    id: int
    type: str
    called: datetime | None
    video_id: str
    taken: timedelta
    error: str
    video: dict[str, Any]

    @field_serializer("taken")
    def _taken_seconds(self, taken: timedelta) -> float:
        return taken.total_seconds()


class StatusResponse(BaseModel):
    """GET /v1/status response."""

    server_started: datetime
    calls: list[ApiCallDetail]
    error: str | None = None

    @model_serializer(mode="wrap")
    def _omit_missing_error(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # Only the top-level error key is dropped; null values inside calls stay.
        data = handler(self)
        if self.error is None:
            data.pop("error", None)
        return data
