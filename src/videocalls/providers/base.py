"""Base provider interface.

Providers implement a narrow interface: get_video(video_id) -> Video.
They must not write to the database or shape HTTP responses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from videocalls.models.types import Video

# Operation name recorded on a call record after a successful lookup.
VIDEO_DETAILS_PATH = "/v1/video/details"


class VideoProvider(ABC):
    """Abstract base class for video metadata providers."""

    @abstractmethod
    def get_video(self, video_id: str) -> Video:
        """Fetch the details document for a video.

        Args:
            video_id: Provider identifier of the video.

        Returns:
            Video as returned by the provider. Its video_id is canonical.

        Raises:
            ProviderError: If the provider rejects the request or is unreachable.
        """
        pass
