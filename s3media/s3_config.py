"""
S3Config - Connection settings for the object store.
"""

import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class S3Config:
    """
    S3 connection configuration.
    
    Attributes:
        bucket: Target bucket
        region: AWS region (e.g., 'us-east-1')
        cdn: Public base URL; when unset, the bucket's virtual-hosted URL is used
        endpoint: Custom endpoint for S3-compatible stores (None for AWS)
        access_key: Access key ID (None to use the default credential chain)
        secret_key: Secret access key
        verify_ssl: Verify TLS certificates
        addressing_style: botocore addressing style ('auto', 'virtual', 'path')
    """
    bucket: str = ''
    region: str = ''
    cdn: Optional[str] = None
    endpoint: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    verify_ssl: bool = True
    addressing_style: str = 'auto'
    
    @property
    def base_url(self) -> str:
        """Public base URL for stored objects, without trailing slash."""
        if self.cdn:
            return self.cdn.rstrip('/')
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com"
    
    def validate(self) -> List[str]:
        """Validate configuration, returning a list of error messages."""
        errors = []
        if not self.bucket:
            errors.append("S3 bucket is required (S3_BUCKET)")
        if not self.region and not self.cdn:
            errors.append("S3 region is required when no CDN is configured (S3_REGION)")
        if bool(self.access_key) != bool(self.secret_key):
            errors.append("S3_ACCESS_KEY and S3_SECRET_KEY must be set together")
        if self.addressing_style not in ('auto', 'virtual', 'path'):
            errors.append(f"Unknown addressing style: {self.addressing_style}")
        return errors
    
    @classmethod
    def from_env(cls) -> 'S3Config':
        """Build configuration from S3_* environment variables."""
        return cls(
            bucket=os.getenv('S3_BUCKET', ''),
            region=os.getenv('S3_REGION', ''),
            cdn=os.getenv('S3_CDN') or None,
            endpoint=os.getenv('S3_ENDPOINT') or None,
            access_key=os.getenv('S3_ACCESS_KEY') or None,
            secret_key=os.getenv('S3_SECRET_KEY') or None,
            verify_ssl=os.getenv('S3_VERIFY_SSL', 'true').lower() not in ('0', 'false', 'no'),
            addressing_style=os.getenv('S3_ADDRESSING_STYLE', 'auto'),
        )
