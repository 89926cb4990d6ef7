"""Mock provider for local development and testing.

Answers video details lookups in-process without calling the SYNQ API.
Identifiers are validated the way SYNQ validates them, so malformed ids
fail with the same message the real service returns.
"""

from __future__ import annotations

import hashlib
import re

from videocalls.errors import ProviderError
from videocalls.models.types import Video
from videocalls.providers.base import VideoProvider

INVALID_UUID_MESSAGE = "Invalid uuid. Example: '1c0e3ea4529011e6991554a050defa20'."

_UUID_RE = re.compile(r"^[0-9a-f]{32}$")


def canonical_video_id(video_id: str) -> str | None:
    """Normalize a video id to SYNQ's canonical form (32 lowercase hex chars).

    Dashed UUIDs and upper case are accepted. Returns None if the id is not
    a UUID.
    """
    candidate = video_id.strip().replace("-", "").lower()
    if _UUID_RE.match(candidate):
        return candidate
    return None


class MockProvider(VideoProvider):
    """Mock provider returning deterministic video documents.

    Every requested id is recorded in `requests`, in order, so tests can
    assert how many lookups reached the provider.
    """

    def __init__(self, videos: dict[str, Video] | None = None):
        """Initialize mock provider.

        Args:
            videos: Optional fixed documents keyed by canonical video id.
                Ids not listed get a synthetic document.
        """
        self.videos = dict(videos or {})
        self.requests: list[str] = []

    def _synthetic_video(self, video_id: str) -> Video:
        """Build a stable fake document for an id."""
        digest = hashlib.sha256(video_id.encode()).hexdigest()
        return Video(
            video_id=video_id,
            state="uploaded",
            userdata={},
            metadata={"source": "mock", "checksum": digest[:16]},
            input={"duration": int(digest[:4], 16) % 600 + 1},
            created_at="2017-01-01T00:00:00.000Z",
            updated_at="2017-01-01T00:00:00.000Z",
        )

    def get_video(self, video_id: str) -> Video:
        """Look up a video, failing on malformed ids."""
        self.requests.append(video_id)

        canonical = canonical_video_id(video_id)
        if canonical is None:
            raise ProviderError(INVALID_UUID_MESSAGE, status_code=400)

        if canonical in self.videos:
            return self.videos[canonical]
        return self._synthetic_video(canonical)
