from vod_edge.models.schemas import RecordingDescriptor, Rendition


class S3Keys:
    """Centralized S3 key namespace - no state needed, hence staticmethods."""

    RENDITION_PLAYLIST_NAME = "playlist.m3u8"
    METADATA_PREFIX = "recording-started-latest"

    # === REQUEST URIS ===

    @staticmethod
    def key_from_uri(uri: str) -> str:
        """CloudFront request uri -> S3 key (strip the leading slash)."""
        return uri[1:] if uri.startswith("/") else uri

    @staticmethod
    def is_rendition_playlist(key: str) -> bool:
        return key.endswith("/" + S3Keys.RENDITION_PLAYLIST_NAME)

    @staticmethod
    def is_recording_metadata(key: str) -> bool:
        filename = key.split("/")[-1]
        return filename.startswith(S3Keys.METADATA_PREFIX) and filename.endswith(".json")

    # === RECORDING ===

    @staticmethod
    def master_key(descriptor: RecordingDescriptor) -> str:
        return f"{descriptor.master_path}/{descriptor.master_playlist_name}"

    @staticmethod
    def rendition_key(descriptor: RecordingDescriptor, rendition: Rendition) -> str:
        return f"{descriptor.master_path}/{rendition.path}/{rendition.playlist_name}"

    # === PARSING ===

    @staticmethod
    def channel_id_from_arn(channel_arn: str) -> str:
        """
        arn:aws:ivs:us-east-1:667901935354:channel/44USK7rjNnSh -> 44USK7rjNnSh
        Returns "" when the value has no resource id.
        """
        if "/" not in channel_arn:
            return ""
        return channel_arn.rsplit("/", 1)[-1]
