"""Root test fixtures for vod_edge test suite."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from vod_edge.core.errors import ExternalServiceError, ObjectNotFoundError
from vod_edge.models.schemas import ChannelRole, EdgeContext, LiveState, PlaylistObject

ACCOUNT = "667901935354"
OVERVIEW_ARN = f"arn:aws:ivs:us-east-1:{ACCOUNT}:channel/44USK7rjNnSh"
INSTRUMENTS_ARN = f"arn:aws:ivs:us-east-1:{ACCOUNT}:channel/9bZxInstr001"
CAPT_ARN = f"arn:aws:ivs:us-east-1:{ACCOUNT}:channel/Cpt7Ab12Cd34"
FO_ARN = f"arn:aws:ivs:us-east-1:{ACCOUNT}:channel/Fo9Zy87Xw65v"
BUCKET = "vod-record-bucket"

NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

RECORDING_PATH = f"ivs/v1/{ACCOUNT}/Cpt7Ab12Cd34/2024/3/1/11/30/ayj1JvYhySGJ/media/hls"

PLAYLIST_BODY = """#EXTM3U
#EXT-X-VERSION:3
#EXT-X-TARGETDURATION:6
#EXT-X-PLAYLIST-TYPE:EVENT
#EXT-X-TWITCH-TOTAL-SECS:1260.5
#EXTINF:6.000,
0.ts
#EXTINF:6.000,
1.ts
#EXT-X-ENDLIST
"""


class FakeS3Service:
    """In-memory stand-in for S3Service keyed by (bucket, key)."""

    def __init__(self, objects=None, failing_keys=None):
        self.objects = dict(objects or {})
        self.failing_keys = set(failing_keys or ())
        self.calls = []

    def put(self, key, body, last_modified_at=NOW, bucket=BUCKET):
        self.objects[(bucket, key)] = PlaylistObject(body=body, last_modified_at=last_modified_at)

    def get_object(self, key, bucket):
        self.calls.append((bucket, key))
        if key in self.failing_keys:
            raise ExternalServiceError(f"S3 GetObject failed for {key}: AccessDenied", service="s3")
        if (bucket, key) not in self.objects:
            raise ObjectNotFoundError(key, bucket)
        return self.objects[(bucket, key)]

    def check_connection(self, bucket):
        return True


class FakeIVSService:
    """Stand-in for IVSService; channels absent from `live` are offline."""

    def __init__(self, live=None, error=None):
        self.live = dict(live or {})
        self.error = error
        self.calls = []

    def query_liveness(self, channel_arn):
        self.calls.append(channel_arn)
        if self.error is not None:
            raise self.error
        return self.live.get(channel_arn, LiveState(is_live=False))


@pytest.fixture
def role_map():
    return {
        ChannelRole.OVERVIEW: OVERVIEW_ARN,
        ChannelRole.INSTRUMENTS: INSTRUMENTS_ARN,
        ChannelRole.CAPTAIN: CAPT_ARN,
        ChannelRole.FO: FO_ARN,
    }


@pytest.fixture
def edge_context(role_map):
    return EdgeContext(bucket_name=BUCKET, role_map=role_map)


@pytest.fixture
def descriptor_payload():
    """recording-started.json as written by the IVS recording configuration."""
    return {
        "version": "v1",
        "channel_arn": CAPT_ARN,
        "channelId": "Cpt7Ab12Cd34",
        "streamId": "st-1A2b3C4d5E6f7G8h9I0j1K2",
        "recording_started_at": "2024-03-01T11:30:04Z",
        "recording_status": "RECORDING_STARTED",
        "media": {
            "hls": {
                "duration_ms": 0,
                "path": RECORDING_PATH,
                "playlist": "master.m3u8",
                "renditions": [
                    {"path": "1080p60", "playlist": "playlist.m3u8",
                     "resolution_width": 1920, "resolution_height": 1080},
                    {"path": "480p30", "playlist": "playlist.m3u8",
                     "resolution_width": 852, "resolution_height": 480},
                ],
            }
        },
    }


@pytest.fixture
def fake_s3():
    return FakeS3Service()


@pytest.fixture
def stored_recording(fake_s3, descriptor_payload):
    """FakeS3Service holding a descriptor and its highest quality rendition."""
    fake_s3.put("recording-started-latest.json", json.dumps(descriptor_payload))
    fake_s3.put(f"{RECORDING_PATH}/1080p60/playlist.m3u8", PLAYLIST_BODY,
                last_modified_at=NOW - timedelta(seconds=5))
    return fake_s3


@pytest.fixture
def aws_credentials(monkeypatch):
    """Dummy credentials so boto3 clients can be built offline."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
