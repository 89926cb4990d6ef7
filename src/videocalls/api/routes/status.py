"""Status API endpoint.

GET /v1/status - Server start time and every recorded api call
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from videocalls.api.app import AppContext, get_context, get_db_session
from videocalls.db import repo
from videocalls.db.repo import DbSession
from videocalls.models.domain import ApiCallEntity
from videocalls.models.types import ApiCallDetail, StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _call_to_detail(call: ApiCallEntity) -> ApiCallDetail:
    """Convert ApiCallEntity to ApiCallDetail."""
    return ApiCallDetail(
        id=call.id,
        type=call.type,
        called=call.called_at,
        video_id=call.video_id,
        taken=call.taken,
        error=call.error,
        video=call.video,
    )


@router.get("/status", response_model=StatusResponse)
def status(
    context: AppContext = Depends(get_context),
    session: DbSession = Depends(get_db_session),
) -> StatusResponse:
    """Report server start time and all stored api calls.

    Always answers 200. A failed read is reported in `error` with no calls.
    """
    try:
        calls = [_call_to_detail(c) for c in repo.get_api_calls(session)]
    except SQLAlchemyError as e:
        logger.exception("Failed to read api calls")
        return StatusResponse(server_started=context.server_started, calls=[], error=str(e))

    return StatusResponse(server_started=context.server_started, calls=calls)
