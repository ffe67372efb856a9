"""
Builds the recording-started-latest*.json response: whether the channel is
live, its live playback URL, and where its latest recording lives.

The descriptor is written by a separate S3 event handler once IVS reports that
recording started, so early requests regularly find no object. That case is
returned as None (serialised to JSON null) rather than as an error.
"""
import json
import logging
import re
from typing import Callable, Mapping, Optional

from vod_edge.core.errors import DescriptorParseError, ObjectNotFoundError
from vod_edge.models.schemas import (
    ChannelRole,
    LiveState,
    PlaylistObject,
    RecordingDescriptor,
    ResponseMetadata,
)
from vod_edge.services.channel_identity import resolve_role_by_arn
from vod_edge.services.s3_keys import S3Keys

logger = logging.getLogger(__name__)

TOTAL_SECS_PATTERN = re.compile(r"EXT-X-TWITCH-TOTAL-SECS:(.+)$", re.MULTILINE)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

FetchObject = Callable[[str], PlaylistObject]


def load_descriptor(descriptor_key: str, fetch_object: FetchObject) -> Optional[RecordingDescriptor]:
    """Descriptor at descriptor_key, or None if it has not been written yet."""
    try:
        obj = fetch_object(descriptor_key)
    except ObjectNotFoundError:
        logger.info(f"{descriptor_key} not written yet, channel has not started recording")
        return None

    try:
        payload = json.loads(obj.body)
    except ValueError as e:
        raise DescriptorParseError(f"{descriptor_key} is not valid JSON: {e}") from e
    return RecordingDescriptor.from_payload(payload)


def parse_total_secs(playlist_body: str) -> Optional[int]:
    match = TOTAL_SECS_PATTERN.search(playlist_body)
    if not match:
        return None
    # parseInt semantics: leading integer of the captured value
    number = _LEADING_INT.match(match.group(1))
    return int(number.group(1)) if number else None


def read_playlist_duration(descriptor: RecordingDescriptor, fetch_object: FetchObject) -> Optional[int]:
    """
    Total seconds of the highest quality rendition, or None.

    Only iOS players need this for an open VOD playlist (other players read it
    from the player instance), so any failure here is swallowed.
    """
    try:
        highest_rendition = descriptor.highest_rendition()
        rendition_key = S3Keys.rendition_key(descriptor, highest_rendition)
        return parse_total_secs(fetch_object(rendition_key).body)
    except Exception as e:
        logger.debug(f"Duration read failed for {descriptor.master_path}: {e!r}")
        return None


def resolve_metadata(
    descriptor_key: str,
    fetch_object: FetchObject,
    role_map: Mapping[ChannelRole, str],
    query_liveness: Callable[[str], LiveState],
) -> Optional[ResponseMetadata]:
    descriptor = load_descriptor(descriptor_key, fetch_object)
    if descriptor is None:
        return None

    source_position = resolve_role_by_arn(descriptor.channel_arn, role_map)
    live_state = query_liveness(descriptor.channel_arn)

    metadata = ResponseMetadata(
        is_channel_live=live_state.is_live,
        live_playback_url=(live_state.playback_url or "") if live_state.is_live else "",
        channel_id=descriptor.channel_id,
        source_position=source_position,
    )

    # Attached whether or not recorded_stream_id matches the active stream:
    # viewers want the latest VOD after the stream stops too.
    metadata.master_key = S3Keys.master_key(descriptor)
    metadata.recording_started_at = descriptor.recording_started_at
    metadata.playlist_duration_seconds = read_playlist_duration(descriptor, fetch_object)

    return metadata
