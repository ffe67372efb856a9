"""
Map a channel ARN or a recording path onto the camera role it belongs to.

IVS recording keys look like

    ivs/v1/667901935354/44USK7rjNnSh/2023/2/13/16/19/ayj1JvYhySGJ/media/hls/720p60/playlist.m3u8

where the fourth segment is the id that ends the channel ARN
(arn:aws:ivs:us-east-1:667901935354:channel/44USK7rjNnSh). ARNs are matched
exactly, paths by segment.
"""
from typing import List, Mapping, Tuple

from vod_edge.models.schemas import ChannelRole, ROLE_ORDER
from vod_edge.services.s3_keys import S3Keys


def _role_table(role_map: Mapping[ChannelRole, str]) -> List[Tuple[ChannelRole, str]]:
    """Ordered (role, arn) pairs, skipping roles with no configured ARN."""
    return [(role, role_map[role]) for role in ROLE_ORDER if role_map.get(role)]


def resolve_role_by_arn(channel_arn: str, role_map: Mapping[ChannelRole, str]) -> ChannelRole:
    for role, arn in _role_table(role_map):
        if channel_arn == arn:
            return role
    return ChannelRole.UNKNOWN


def resolve_role_by_path(path: str, role_map: Mapping[ChannelRole, str]) -> ChannelRole:
    segments = path.split("/")
    for role, arn in _role_table(role_map):
        channel_id = S3Keys.channel_id_from_arn(arn)
        if channel_id and channel_id in segments:
            return role
    return ChannelRole.UNKNOWN


def resolve_role(candidate: str, role_map: Mapping[ChannelRole, str]) -> ChannelRole:
    """Exact ARN match when candidate is an ARN, path segment match otherwise."""
    if candidate.startswith("arn:"):
        return resolve_role_by_arn(candidate, role_map)
    return resolve_role_by_path(candidate, role_map)


def channel_arn_for_path(path: str, role_map: Mapping[ChannelRole, str]) -> str:
    """ARN of the role owning path, "" when no configured channel matches."""
    role = resolve_role_by_path(path, role_map)
    if role is ChannelRole.UNKNOWN:
        return ""
    return role_map[role]
