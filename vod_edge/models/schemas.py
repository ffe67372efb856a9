from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vod_edge.core.errors import DescriptorParseError


class ChannelRole(str, Enum):
    OVERVIEW = "OVERVIEW"
    INSTRUMENTS = "INSTRUMENTS"
    CAPTAIN = "CAPTAIN"
    FO = "FO"
    UNKNOWN = "UNKNOWN"


# Matching order for role resolution, first match wins
ROLE_ORDER = (
    ChannelRole.OVERVIEW,
    ChannelRole.INSTRUMENTS,
    ChannelRole.CAPTAIN,
    ChannelRole.FO,
)


class EdgeContext(BaseModel):
    """Per-request configuration carried in the origin's custom headers."""
    model_config = ConfigDict(frozen=True)

    bucket_name: str
    role_map: Dict[ChannelRole, str] = Field(default_factory=dict)


class LiveState(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_live: bool = False
    playback_url: Optional[str] = None
    active_stream_id: Optional[str] = None


class PlaylistObject(BaseModel):
    body: str
    last_modified_at: Optional[datetime] = None


class CacheDirective(BaseModel):
    model_config = ConfigDict(frozen=True)

    body: str
    max_age_seconds: int = Field(ge=0)


class Rendition(BaseModel):
    path: str
    playlist_name: str


class RecordingDescriptor(BaseModel):
    """recording-started JSON written by the IVS recording configuration."""

    master_path: str
    master_playlist_name: str
    # Raw entries, only read by the best-effort duration read
    renditions: Any = None
    recording_started_at: Optional[str] = None
    recorded_stream_id: Optional[str] = None
    channel_id: Optional[str] = None
    channel_arn: str

    @classmethod
    def from_payload(cls, payload: Any) -> "RecordingDescriptor":
        """
        Pick the fields we need out of the IVS recording-started payload:

            {"channel_arn": ..., "channelId": ..., "streamId": ...,
             "recording_started_at": ...,
             "media": {"hls": {"path": ..., "playlist": ...,
                               "renditions": [{"path": ..., "playlist": ...}]}}}
        """
        try:
            hls = payload["media"]["hls"]
            return cls(
                master_path=hls["path"],
                master_playlist_name=hls["playlist"],
                renditions=hls.get("renditions"),
                recording_started_at=payload.get("recording_started_at"),
                recorded_stream_id=payload.get("streamId"),
                channel_id=payload.get("channelId"),
                channel_arn=payload["channel_arn"],
            )
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise DescriptorParseError(f"Malformed recording descriptor: {e!r}") from e

    def highest_rendition(self) -> Rendition:
        """First rendition entry. Raises if it is missing or malformed."""
        entry = self.renditions[0]
        return Rendition(path=entry["path"], playlist_name=entry["playlist"])


class ResponseMetadata(BaseModel):
    """JSON body returned for recording-started-latest*.json requests."""
    model_config = ConfigDict(populate_by_name=True)

    is_channel_live: bool = Field(alias="isChannelLive")
    live_playback_url: Optional[str] = Field(default=None, alias="livePlaybackUrl")
    master_key: Optional[str] = Field(default=None, alias="masterKey")
    recording_started_at: Optional[str] = Field(default=None, alias="recordingStartedAt")
    playlist_duration_seconds: Optional[int] = Field(default=None, alias="playlistDuration")
    channel_id: Optional[str] = Field(default=None, alias="channelId")
    source_position: ChannelRole = Field(alias="sourcePosition")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


class HealthResponse(BaseModel):
    status: str
    s3_connected: bool
    version: str
