"""
S3 Asset Manager

This is a concrete implementation of the AssetManager for an S3-compatible
filestore fronted by a CDN.
"""
import logging

import backoff
import boto3
from botocore.exceptions import BotoCoreError, ClientError

from shared.modules.assets.asset_manager import AssetManager

logger = logging.getLogger(__name__)

# Uploaded keys are unique, so the CDN may cache them forever
CACHE_CONTROL = "public, max-age=31536000, immutable"


def _on_s3_backoff(details):
    logger.warning("Backing off {wait:0.1f} seconds after {tries} tries uploading to S3".format(**details))


class S3AssetManager(AssetManager):
    """
    Manages assets in an S3 bucket. Ideal for production environments.
    """

    def __init__(self, bucket_name: str, region: str, public_base_url: str = None, client=None,
                 aws_access_key_id: str = None, aws_secret_access_key: str = None):
        """
        Initializes the S3AssetManager.

        Args:
            bucket_name (str): The name of the S3 bucket.
            region (str): The S3 region.
            public_base_url (str): CDN base URL; defaults to the bucket's own endpoint.
            client: Optional pre-built boto3 S3 client.
        """
        super().__init__(public_base_url or f"https://{bucket_name}.s3.{region}.amazonaws.com")
        self.bucket_name = bucket_name
        self.region = region
        self.client = client or boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
        )
        logger.info(f"S3AssetManager initialized for bucket '{bucket_name}' in region '{region}'.")

    @backoff.on_exception(
        backoff.expo,
        (ClientError, BotoCoreError),
        on_backoff=_on_s3_backoff,
        max_tries=3,
    )
    def upload_bytes(self, data: bytes, key: str, content_type: str) -> str:
        self.client.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=data,
            ContentType=content_type,
            CacheControl=CACHE_CONTROL,
        )
        public_url = self.public_url(key)
        logger.info(f"S3AssetManager: uploaded '{key}' to bucket '{self.bucket_name}'. Public URL: {public_url}")
        return public_url
