"""SYNQ video API client.

Talks to POST {base_url}/v1/video/details with form-encoded api_key and
video_id. Error responses carry a JSON body whose "message" is surfaced
unchanged as the ProviderError text.
"""

from __future__ import annotations

import logging

import httpx

from videocalls.errors import ProviderError
from videocalls.models.types import Video
from videocalls.providers.base import VIDEO_DETAILS_PATH, VideoProvider

logger = logging.getLogger(__name__)


class SynqProvider(VideoProvider):
    """Provider backed by the SYNQ HTTP API."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize SYNQ provider.

        Args:
            api_key: SYNQ API key, sent with every request.
            base_url: API root, e.g. https://api.synq.fm
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _post(self, path: str, data: dict[str, str]) -> httpx.Response:
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                return client.post(f"{self.base_url}{path}", data=data)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ProviderError(str(e)) from e

    def get_video(self, video_id: str) -> Video:
        """Fetch video details from SYNQ."""
        response = self._post(
            VIDEO_DETAILS_PATH,
            {"api_key": self.api_key, "video_id": video_id},
        )

        if response.is_error:
            raise ProviderError(_error_message(response), status_code=response.status_code)

        try:
            return Video.model_validate(response.json())
        except ValueError as e:
            logger.warning(f"Unexpected SYNQ response for video {video_id!r}: {e}")
            raise ProviderError(f"invalid response from provider : {e}") from e


def _error_message(response: httpx.Response) -> str:
    """Extract the provider's error message from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"{response.status_code} {response.reason_phrase}".strip()
