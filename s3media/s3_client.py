"""
S3Client - Writes and deletes objects in an S3 bucket.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config

from .s3_config import S3Config


class S3Client:
    """
    Wrapper for the S3 operations the pipeline needs.
    
    Errors from boto3 (botocore ``ClientError`` and friends) propagate to
    the caller unchanged.
    """
    
    DEFAULT_ACL = 'public-read'
    
    def __init__(self, config: S3Config, logger: Optional[logging.Logger] = None):
        """
        Initialize S3 client.
        
        Args:
            config: S3 configuration
            logger: Optional logger instance
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        
        self._client = boto3.client(
            's3',
            endpoint_url=config.endpoint,
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            region_name=config.region or None,
            config=Config(
                signature_version='s3v4',
                s3={'addressing_style': config.addressing_style}
            ),
            verify=config.verify_ssl
        )
    
    @property
    def client(self):
        """Return the underlying boto3 client."""
        return self._client
    
    def put(
        self,
        key: str,
        body: bytes,
        content_type: str = 'application/octet-stream',
        acl: str = DEFAULT_ACL,
        extra_params: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Upload an object.
        
        Args:
            key: Object key
            body: Object bytes
            content_type: Content-Type header
            acl: Canned ACL
            extra_params: Extra put_object parameters; these override any
                of the above, Bucket and ACL included
        
        Returns:
            The key written. Public URLs are built from keys by
            PathNamer.url_for, never by the store.
        """
        params = {
            'Bucket': self.config.bucket,
            'Key': key,
            'Body': body,
            'ACL': acl,
            'ContentType': content_type,
            **(extra_params or {}),
        }
        self.logger.debug(f"Uploading: {params['Key']}")
        self._client.put_object(**params)
        return params['Key']
    
    def delete(self, key: str, extra_params: Optional[Dict[str, Any]] = None) -> None:
        """Delete an object. Deleting a missing key is not an error in S3."""
        params = {
            'Bucket': self.config.bucket,
            'Key': key,
            **(extra_params or {}),
        }
        self.logger.debug(f"Deleting: {params['Key']}")
        self._client.delete_object(**params)
