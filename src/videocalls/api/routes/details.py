"""Details API endpoint.

POST /v1/details - Look up a video at the provider and record the call
"""

from __future__ import annotations

import pydantic
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from videocalls.api.app import get_db_session, get_provider
from videocalls.calls import invoke_api_call
from videocalls.db.repo import DbSession
from videocalls.errors import ProviderError
from videocalls.models.domain import ApiCallEntity
from videocalls.models.types import DetailsRequest, DetailsResponse, MessageResponse
from videocalls.providers.base import VideoProvider

router = APIRouter()

MISSING_VIDEO_ID_MESSAGE = "missing 'video_id'"
API_CALL_FAILED_PREFIX = "failed to make api call : "


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message).model_dump(),
    )


@router.post(
    "/details",
    response_model=DetailsResponse,
    responses={400: {"model": MessageResponse}},
)
async def details(
    request: Request,
    session: DbSession = Depends(get_db_session),
    provider: VideoProvider = Depends(get_provider),
):
    """Fetch details for a video and record the api call.

    The body is read by hand so that malformed or empty bodies are reported
    the same way as a missing video_id.

    Returns:
        DetailsResponse with the provider's video document and canonical id,
        or a 400 MessageResponse.
    """
    try:
        body = DetailsRequest.model_validate_json(await request.body())
    except pydantic.ValidationError:
        return _message(400, MISSING_VIDEO_ID_MESSAGE)

    call = ApiCallEntity(video_id=body.video_id)
    try:
        await run_in_threadpool(invoke_api_call, session, provider, call)
    except ProviderError as e:
        return _message(400, API_CALL_FAILED_PREFIX + e.message)

    return DetailsResponse(message=call.video, id=call.video_id)
