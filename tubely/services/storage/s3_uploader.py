import logging
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from tubely.core.config import settings
from tubely.services.storage.interfaces import ObjectUploader, StorageError

logger = logging.getLogger(__name__)


class S3Config:
    """Immutable configuration object"""
    def __init__(self, bucket: str, region: str, endpoint: Optional[str] = None,
                 access_key: Optional[str] = None, secret_key: Optional[str] = None):
        self.bucket = bucket
        self.region = region
        self.endpoint = endpoint
        self.access_key = access_key
        self.secret_key = secret_key

    @classmethod
    def from_settings(cls) -> "S3Config":
        return cls(
            bucket=settings.S3_BUCKET,
            region=settings.S3_REGION,
            endpoint=settings.S3_ENDPOINT,
            access_key=settings.S3_ACCESS_KEY,
            secret_key=settings.S3_SECRET_KEY,
        )


class S3Uploader(ObjectUploader):
    """S3 bucket upload implementation"""
    def __init__(self, config: S3Config):
        self.bucket_name = config.bucket
        # Credentials fall back to the default boto3 chain when unset
        self.boto_client = boto3.client(
            's3',
            endpoint_url=config.endpoint,
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            config=Config(
                region_name=config.region,
                signature_version='s3v4'
            )
        )

    def put_object(self, local_path: str, object_key: str, content_type: str) -> str:
        try:
            with open(local_path, 'rb') as body:
                self.boto_client.put_object(
                    Bucket=self.bucket_name,
                    Key=object_key,
                    Body=body,
                    ContentType=content_type,
                )
        except (BotoCoreError, ClientError, OSError) as e:
            raise StorageError(f"Upload failed for {object_key}: {e}") from e

        logger.info("Uploaded %s to s3://%s/%s", local_path, self.bucket_name, object_key)
        return object_key
