"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from videocalls.db.schema import ApiCall
from videocalls.errors import ValidationError
from videocalls.models.domain import ApiCallEntity

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = [
    "DbSession",
    "MISSING_VIDEO_ID",
    "create_api_call",
    "get_api_calls",
    "save_api_call",
    "update_api_call",
]

MISSING_VIDEO_ID = "missing video id, can not save job"


def _api_call_to_entity(call: ApiCall) -> ApiCallEntity:
    """Convert SQLAlchemy ApiCall to domain entity."""
    return ApiCallEntity(
        id=call.id,
        type=call.type,
        created_at=call.ctime,
        called_at=call.called,
        video_id=call.video_id,
        taken=call.taken,
        error=call.error,
        video=call.result or {},
    )


def create_api_call(session: DbSession, entity: ApiCallEntity) -> ApiCallEntity:
    """Insert a new api call and adopt its generated id."""
    call = ApiCall(
        video_id=entity.video_id,
        called=entity.called_at,
        taken=entity.taken,
        type=entity.type,
        error=entity.error,
        result=entity.video,
    )
    session.add(call)
    session.flush()
    entity.id = call.id
    return entity


def update_api_call(session: DbSession, entity: ApiCallEntity) -> None:
    """Overwrite every mutable field of an existing api call by id."""
    session.query(ApiCall).filter(ApiCall.id == entity.id).update(
        {
            ApiCall.video_id: entity.video_id,
            ApiCall.called: entity.called_at,
            ApiCall.taken: entity.taken,
            ApiCall.type: entity.type,
            ApiCall.error: entity.error,
            ApiCall.result: entity.video,
        },
        synchronize_session=False,
    )


def save_api_call(session: DbSession, entity: ApiCallEntity) -> ApiCallEntity:
    """Insert or update an api call and commit.

    Updates in place when the entity already has an id, inserts otherwise.

    Raises:
        ValidationError: If video_id is empty. Nothing is written.
        sqlalchemy.exc.SQLAlchemyError: Storage failures, after rollback.
    """
    if not entity.video_id:
        raise ValidationError(MISSING_VIDEO_ID)

    inserting = not entity.exists()
    try:
        if inserting:
            create_api_call(session, entity)
        else:
            update_api_call(session, entity)
        session.commit()
    except Exception:
        session.rollback()
        if inserting:
            entity.id = None
        raise
    return entity


def get_api_calls(session: DbSession, video_id: str | None = None) -> list[ApiCallEntity]:
    """Get stored api calls in id order, optionally for a single video."""
    query = session.query(ApiCall)
    if video_id is not None:
        query = query.filter(ApiCall.video_id == video_id)
    return [_api_call_to_entity(c) for c in query.order_by(ApiCall.id).all()]
