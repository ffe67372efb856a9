"""
Exception types raised by the edge resolvers.

ObjectNotFoundError is the only one callers are expected to recover from
(a recording descriptor that does not exist yet). Everything else is fatal
for the current request and ends up as a 500 response.
"""
from typing import Optional


class VodEdgeError(Exception):
    """Base class for all errors raised by vod_edge."""


class ExternalServiceError(VodEdgeError):
    """S3 or IVS call failed."""

    def __init__(self, message: str, service: Optional[str] = None):
        super().__init__(message)
        self.service = service


class ObjectNotFoundError(ExternalServiceError):
    """Requested S3 key does not exist."""

    def __init__(self, key: str, bucket: str):
        super().__init__(f"s3://{bucket}/{key} does not exist", service="s3")
        self.key = key
        self.bucket = bucket


class DescriptorParseError(VodEdgeError):
    """Recording descriptor JSON is malformed or missing required fields."""
