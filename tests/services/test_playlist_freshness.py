"""Tests for vod_edge.services.playlist_freshness."""

from datetime import datetime, timedelta

import pytest

from tests.conftest import NOW, PLAYLIST_BODY
from vod_edge.core.errors import ExternalServiceError
from vod_edge.models.schemas import LiveState, PlaylistObject
from vod_edge.services.playlist_freshness import (
    ENDLIST_TAG,
    playlist_age_seconds,
    remove_endlist,
    resolve_freshness,
)

pytestmark = pytest.mark.unit

LIVE = LiveState(is_live=True, playback_url="https://x.live-video.net/api/video/v1/a.m3u8")
OFFLINE = LiveState(is_live=False)


def _playlist(age_seconds, body=PLAYLIST_BODY):
    return PlaylistObject(body=body, last_modified_at=NOW - timedelta(seconds=age_seconds))


class _Liveness:
    def __init__(self, state=OFFLINE, error=None):
        self.state = state
        self.error = error
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.state


class TestRemoveEndlist:
    def test_removes_tag_and_trims(self):
        assert remove_endlist("#EXTM3U\n0.ts\n#EXT-X-ENDLIST\n") == "#EXTM3U\n0.ts"

    def test_no_tag_is_only_trimmed(self):
        assert remove_endlist("  #EXTM3U\n0.ts\n") == "#EXTM3U\n0.ts"


class TestPlaylistAge:
    def test_negative_age_clamps_to_zero(self):
        assert playlist_age_seconds(NOW + timedelta(seconds=5), NOW) == 0.0

    def test_missing_timestamp_is_very_old(self):
        assert playlist_age_seconds(None, NOW) > 32

    def test_naive_timestamps_are_utc(self):
        naive = datetime(2024, 3, 1, 11, 59, 50)
        assert playlist_age_seconds(naive, NOW) == 10.0


class TestInsideUpdateWindow:
    def test_ten_seconds_old(self):
        liveness = _Liveness()
        directive = resolve_freshness(_playlist(10), NOW, liveness)

        assert ENDLIST_TAG not in directive.body
        assert directive.max_age_seconds == 20
        assert liveness.calls == 0

    @pytest.mark.parametrize("age", [0.4, 12.7, 29.9, 30, 31, 31.99])
    def test_max_age_bounds(self, age):
        directive = resolve_freshness(_playlist(age), NOW, _Liveness())
        assert ENDLIST_TAG not in directive.body
        assert 0 <= directive.max_age_seconds < 30

    def test_write_buffer_gives_zero_max_age(self):
        directive = resolve_freshness(_playlist(31), NOW, _Liveness())
        assert directive.max_age_seconds == 0

    def test_clock_skew_counts_as_fresh(self):
        directive = resolve_freshness(_playlist(-15), NOW, _Liveness())
        assert ENDLIST_TAG not in directive.body
        assert directive.max_age_seconds == 30

    def test_liveness_errors_not_raised_inside_window(self):
        liveness = _Liveness(error=ExternalServiceError("boom"))
        directive = resolve_freshness(_playlist(3), NOW, liveness)
        assert directive.max_age_seconds == 27


class TestOutsideUpdateWindow:
    def test_live_channel_forces_revalidation(self):
        liveness = _Liveness(LIVE)
        directive = resolve_freshness(_playlist(40), NOW, liveness)

        assert ENDLIST_TAG not in directive.body
        assert directive.max_age_seconds == 0
        assert liveness.calls == 1

    def test_offline_channel_returns_final_playlist(self):
        directive = resolve_freshness(_playlist(40), NOW, _Liveness(OFFLINE))

        assert directive.body == PLAYLIST_BODY
        assert directive.max_age_seconds == 31536000

    def test_window_boundary_queries_liveness(self):
        liveness = _Liveness(OFFLINE)
        resolve_freshness(_playlist(32), NOW, liveness)
        assert liveness.calls == 1

    def test_liveness_failure_propagates(self):
        with pytest.raises(ExternalServiceError):
            resolve_freshness(_playlist(40), NOW, _Liveness(error=ExternalServiceError("ivs down")))

    def test_missing_last_modified_uses_liveness(self):
        playlist = PlaylistObject(body=PLAYLIST_BODY, last_modified_at=None)
        directive = resolve_freshness(playlist, NOW, _Liveness(LIVE))
        assert directive.max_age_seconds == 0


class TestIdempotence:
    @pytest.mark.parametrize("age, state", [(10, OFFLINE), (40, LIVE), (40, OFFLINE)])
    def test_same_inputs_same_output(self, age, state):
        playlist = _playlist(age)
        first = resolve_freshness(playlist, NOW, _Liveness(state))
        second = resolve_freshness(playlist, NOW, _Liveness(state))
        assert first == second
