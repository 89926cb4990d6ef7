"""Invocation of a single api call.

An api call is always persisted once the provider has answered, whether
the answer was a video or an error, so the stored row reflects the final
taken/error/type/video values.
"""

from __future__ import annotations

import logging
import time
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from videocalls.db import repo
from videocalls.db.repo import DbSession
from videocalls.errors import ProviderError, ValidationError
from videocalls.models.domain import ApiCallEntity
from videocalls.providers.base import VIDEO_DETAILS_PATH, VideoProvider

logger = logging.getLogger(__name__)


def _save_quietly(session: DbSession, call: ApiCallEntity) -> None:
    """Persist a call, logging instead of raising on failure."""
    try:
        repo.save_api_call(session, call)
    except (ValidationError, SQLAlchemyError):
        logger.exception(f"Failed to save api call for video {call.video_id!r}")


def invoke_api_call(
    session: DbSession,
    provider: VideoProvider,
    call: ApiCallEntity,
) -> ApiCallEntity:
    """Fetch video details for a call and record the outcome.

    Mutates `call` in place: taken is always set; on success type, video_id
    and video are set from the provider response and error is cleared; on
    failure error holds the failure message. The call is saved on the way
    out whatever happened; a failed save is logged and does not change the
    outcome.

    Args:
        session: Database session used for the save.
        provider: Video provider to query.
        call: Call to invoke. call.video_id is sent to the provider.

    Returns:
        The same call, updated.

    Raises:
        ProviderError: If the provider lookup failed.
        Exception: Anything else raised by the provider, after the call is
            recorded.
    """
    start = time.perf_counter()
    try:
        try:
            video = provider.get_video(call.video_id)
        finally:
            call.taken = timedelta(seconds=time.perf_counter() - start)
        call.type = VIDEO_DETAILS_PATH
        call.video_id = video.video_id
        call.video = video.model_dump(mode="json", exclude_unset=True)
        call.error = ""
    except ProviderError as e:
        call.error = e.message
        logger.warning(
            f"Provider lookup failed for video {call.video_id!r} "
            f"(status {e.status_code}): {e.message}"
        )
        raise
    except Exception as e:
        call.error = str(e) or type(e).__name__
        logger.exception(f"Unexpected error looking up video {call.video_id!r}")
        raise
    finally:
        _save_quietly(session, call)
    return call
