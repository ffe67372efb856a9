"""
Playlist freshness resolution for rendition playlists of an in-progress recording.

IVS rewrites each rendition playlist roughly every 30 seconds while a stream
is recording, and each rewrite carries an #EXT-X-ENDLIST tag. Serving that tag
to a player while the recording is still growing makes it treat the VOD as
finished, so:

1. Playlist written within the last 30s (+2s write latency buffer): remove
   #EXT-X-ENDLIST and let the CDN cache until the next expected rewrite.

2. Older than that, channel live: the rewrite may just be late. Remove
   #EXT-X-ENDLIST and return max-age=0.

3. Older than that, channel offline: the playlist is final. Return it
   untouched with max-age of one year.
"""
import logging
import math
from datetime import datetime, timezone
from typing import Callable, Optional

from vod_edge.core.config import settings
from vod_edge.models.schemas import CacheDirective, LiveState, PlaylistObject

logger = logging.getLogger(__name__)

ENDLIST_TAG = "#EXT-X-ENDLIST"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def remove_endlist(playlist: str) -> str:
    return playlist.replace(ENDLIST_TAG, "").strip()


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def playlist_age_seconds(last_modified_at: Optional[datetime], now: datetime) -> float:
    """Seconds since the last write, clamped at 0 for clock skew."""
    last_modified_at = _as_utc(last_modified_at) if last_modified_at else _EPOCH
    age = (_as_utc(now) - last_modified_at).total_seconds()
    return max(0.0, age)


def resolve_freshness(
    playlist: PlaylistObject,
    now: datetime,
    liveness: Callable[[], LiveState],
) -> CacheDirective:
    """
    Decide the body and max-age for a fetched rendition playlist.

    liveness is only called once the playlist is outside its update window;
    anything it raises propagates to the caller.
    """
    update_delay = settings.PLAYLIST_UPDATE_DELAY_SECONDS
    age = playlist_age_seconds(playlist.last_modified_at, now)

    if age < settings.total_update_delay_seconds:
        max_age = math.floor(max(0.0, update_delay - age))
        logger.debug(f"Playlist {age:.1f}s old, inside update window, max-age={max_age}")
        return CacheDirective(body=remove_endlist(playlist.body), max_age_seconds=max_age)

    live_state = liveness()
    if live_state.is_live:
        logger.debug(f"Playlist {age:.1f}s old but channel is live, update may be delayed")
        return CacheDirective(body=remove_endlist(playlist.body), max_age_seconds=0)

    # Final playlist - no re-write
    return CacheDirective(body=playlist.body, max_age_seconds=settings.FINAL_PLAYLIST_MAX_AGE)
