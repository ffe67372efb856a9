"""
Lambda@Edge entry points, triggered on CloudFront origin requests.

    */playlist.m3u8                  -> modify_rendition_playlist
    recording-started-latest*.json   -> get_latest_recording_start_meta

Bucket name and channel ARNs arrive as custom headers on the S3 origin so
that the functions need no environment (Lambda@Edge does not support any).
"""
import json
import logging
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional, Tuple

from vod_edge.core.config import settings
from vod_edge.models.schemas import ChannelRole, EdgeContext
from vod_edge.services.channel_identity import channel_arn_for_path, resolve_role_by_path
from vod_edge.services.edge_response import create_response
from vod_edge.services.ivs_service import IVSService
from vod_edge.services.playlist_freshness import resolve_freshness
from vod_edge.services.recording_metadata import resolve_metadata
from vod_edge.services.s3_keys import S3Keys
from vod_edge.services.s3_service import S3Service

logger = logging.getLogger(__name__)

BUCKET_HEADER = "vod-record-bucket-name"
ROLE_HEADERS: Dict[ChannelRole, Tuple[str, ...]] = {
    ChannelRole.OVERVIEW: ("overview-channel-arn",),
    ChannelRole.INSTRUMENTS: ("instruments-channel-arn", "screens-channel-arn"),
    ChannelRole.CAPTAIN: ("capt-channel-arn",),
    ChannelRole.FO: ("fo-channel-arn",),
}

_services: Optional[Tuple[S3Service, IVSService]] = None


def get_services() -> Tuple[S3Service, IVSService]:
    """Cold start setup. boto3 clients are reused across invocations of a warm container."""
    global _services
    if _services is None:
        logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL))
        _services = (S3Service(), IVSService())
    return _services


def context_from_headers(headers: Mapping[str, str], defaults: Optional[EdgeContext] = None) -> EdgeContext:
    """
    Build the request context from lower-cased custom headers, falling back
    to defaults for anything not present.
    """
    defaults = defaults or EdgeContext(bucket_name="")
    role_map = dict(defaults.role_map)
    for role, names in ROLE_HEADERS.items():
        for name in names:
            if headers.get(name):
                role_map[role] = headers[name]
                break

    return EdgeContext(
        bucket_name=headers.get(BUCKET_HEADER) or defaults.bucket_name,
        role_map=role_map,
    )


def _cloudfront_custom_headers(request: Dict) -> Dict[str, str]:
    custom_headers = request.get("origin", {}).get("s3", {}).get("customHeaders", {})
    return {
        name.lower(): values[0].get("value", "")
        for name, values in custom_headers.items()
        if values
    }


def parse_origin_request(event: Dict) -> Tuple[str, str, EdgeContext]:
    """CloudFront origin request event -> (S3 key, origin path, context)."""
    request = event["Records"][0]["cf"]["request"]
    origin_path = request.get("origin", {}).get("s3", {}).get("path", "")
    context = context_from_headers(_cloudfront_custom_headers(request))
    return S3Keys.key_from_uri(request["uri"]), origin_path, context


def handle_playlist_request(
    key: str,
    context: EdgeContext,
    s3_service: S3Service,
    ivs_service: IVSService,
    origin_path: str = "",
    now: Optional[datetime] = None,
) -> Dict:
    lookup_path = f"{origin_path}/{key}"
    role = resolve_role_by_path(lookup_path, context.role_map)
    channel_arn = channel_arn_for_path(lookup_path, context.role_map)
    logger.info(f"Modify rendition requested for {role.value.lower()}")

    try:
        playlist = s3_service.get_object(key, context.bucket_name)
        directive = resolve_freshness(
            playlist,
            now or datetime.now(timezone.utc),
            lambda: ivs_service.query_liveness(channel_arn),
        )
        return create_response(200, body=directive.body, max_age=directive.max_age_seconds)
    except Exception:
        logger.exception(f"Failed to resolve playlist {key}")
        return create_response(500, max_age=0)


def handle_metadata_request(
    key: str,
    context: EdgeContext,
    s3_service: S3Service,
    ivs_service: IVSService,
) -> Dict:
    max_age = settings.METADATA_MAX_AGE
    try:
        metadata = resolve_metadata(
            key,
            lambda object_key: s3_service.get_object(object_key, context.bucket_name),
            context.role_map,
            ivs_service.query_liveness,
        )
    except Exception:
        logger.exception(f"Failed to resolve recording metadata {key}")
        return create_response(500, max_age=max_age, no_cache=True)

    body = metadata.to_json() if metadata is not None else json.dumps(None)
    return create_response(
        200,
        body=body,
        max_age=max_age,
        content_type="application/json",
        no_cache=True,
    )


def modify_rendition_playlist(event, context):
    key, origin_path, edge_context = parse_origin_request(event)
    s3_service, ivs_service = get_services()
    return handle_playlist_request(key, edge_context, s3_service, ivs_service, origin_path=origin_path)


def get_latest_recording_start_meta(event, context):
    key, _, edge_context = parse_origin_request(event)
    s3_service, ivs_service = get_services()
    return handle_metadata_request(key, edge_context, s3_service, ivs_service)


def handler(event, context):
    """
    Single entry point for both cache behaviours. Requests for any other key
    are returned unchanged so CloudFront forwards them to the S3 origin.
    """
    request = event["Records"][0]["cf"]["request"]
    key = S3Keys.key_from_uri(request["uri"])
    if S3Keys.is_recording_metadata(key):
        return get_latest_recording_start_meta(event, context)
    if S3Keys.is_rendition_playlist(key):
        return modify_rendition_playlist(event, context)
    return request
