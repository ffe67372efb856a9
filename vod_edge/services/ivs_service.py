import boto3
import logging
from typing import Optional
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from vod_edge.core.config import settings
from vod_edge.core.errors import ExternalServiceError
from vod_edge.models.schemas import LiveState

logger = logging.getLogger(__name__)

STREAM_STATE_LIVE = "LIVE"


class IVSService:
    def __init__(self, client=None, region: Optional[str] = None):
        self.region = region or settings.AWS_REGION
        self.ivs = client or boto3.client(
            'ivs',
            region_name=self.region,
            config=Config(retries={'max_attempts': 1, 'mode': 'standard'})
        )
        logger.info(f"IVS Service initialized: {self.region}")

    def get_active_stream(self, channel_arn: str) -> Optional[dict]:
        """
        Active stream of a channel, or None when the channel is not broadcasting.
        Any other failure raises ExternalServiceError.
        """
        try:
            response = self.ivs.get_stream(channelArn=channel_arn)
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code', '')
            if code == 'ChannelNotBroadcasting':
                return None
            logger.error(f"IVS GetStream failed for '{channel_arn}': {code}")
            raise ExternalServiceError(f"IVS GetStream failed: {code}", service="ivs") from e
        except BotoCoreError as e:
            logger.error(f"IVS GetStream failed for '{channel_arn}': {e}")
            raise ExternalServiceError(f"IVS GetStream failed: {e}", service="ivs") from e

        return response.get('stream')

    def query_liveness(self, channel_arn: str) -> LiveState:
        stream = self.get_active_stream(channel_arn)
        if not stream:
            return LiveState(is_live=False)

        return LiveState(
            is_live=stream.get('state') == STREAM_STATE_LIVE,
            playback_url=stream.get('playbackUrl'),
            active_stream_id=stream.get('streamId'),
        )
