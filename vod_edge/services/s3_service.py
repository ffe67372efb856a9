import boto3
import logging
from typing import Optional
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from vod_edge.core.config import settings
from vod_edge.core.errors import ExternalServiceError, ObjectNotFoundError
from vod_edge.models.schemas import PlaylistObject

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


class S3Service:
    def __init__(self, client=None, region: Optional[str] = None):
        self.region = region or settings.AWS_REGION
        # No SDK retries: a failed fetch is surfaced, the CDN re-attempts
        self.s3 = client or boto3.client(
            's3',
            region_name=self.region,
            config=Config(retries={'max_attempts': 1, 'mode': 'standard'})
        )
        logger.info(f"S3 Service initialized: {self.region}")

    def get_object(self, key: str, bucket: str) -> PlaylistObject:
        """
        Fetch a text object from S3.
            key: S3 key
            bucket: bucket name from the request context
        Raises ObjectNotFoundError for a missing key, ExternalServiceError otherwise.
        """
        try:
            response = self.s3.get_object(Bucket=bucket, Key=key)
            body = response['Body'].read().decode('utf-8')
        except ClientError as e:
            code = e.response.get('Error', {}).get('Code', '')
            if code in _NOT_FOUND_CODES:
                logger.debug(f"s3://{bucket}/{key} not found")
                raise ObjectNotFoundError(key, bucket) from e
            logger.error(f"Failed to get s3://{bucket}/{key}: {code}")
            raise ExternalServiceError(f"S3 GetObject failed for {key}: {code}", service="s3") from e
        except (BotoCoreError, UnicodeDecodeError) as e:
            logger.error(f"Failed to get s3://{bucket}/{key}: {e}")
            raise ExternalServiceError(f"S3 GetObject failed for {key}: {e}", service="s3") from e

        return PlaylistObject(body=body, last_modified_at=response.get('LastModified'))

    def check_connection(self, bucket: str) -> bool:
        try:
            self.s3.head_bucket(Bucket=bucket)
            logger.info(f"Connected to bucket: {bucket}")
            return True
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 connection failed: {e}")
            return False
