"""
UploadEvents - Receives structured events from the upload and delete pipelines.
"""

import logging
from typing import Optional


class UploadEvents:
    """
    Observer for pipeline events.
    
    The default implementation logs each event with an ``event`` field in
    ``extra`` so log handlers can pick the structured fields up, and prints a
    line per artifact when ``show_files`` is set.
    """
    
    VARIANT_GENERATED = 'variant_generated'
    ARTIFACT_UPLOADED = 'artifact_uploaded'
    ARTIFACT_DELETED = 'artifact_deleted'
    DELETE_FAILED = 'delete_failed'
    UPLOAD_SKIPPED = 'upload_skipped'
    
    def __init__(self, show_files: bool = False, logger: Optional[logging.Logger] = None):
        """
        Initialize the observer.
        
        Args:
            show_files: If True, print each artifact as it is handled
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.logger = logger or logging.getLogger(__name__)
    
    def on_variant_generated(self, key: str, size_name: str, encoding: str, byte_size: int) -> None:
        """Called after a variant has been encoded."""
        self._emit(
            self.VARIANT_GENERATED,
            f"Generated {key} ({self._format_bytes(byte_size)})",
            key=key, size_name=size_name, encoding=encoding, bytes=byte_size,
        )
    
    def on_artifact_uploaded(self, key: str, byte_size: int, content_type: str) -> None:
        """Called after an artifact has been written to the store."""
        self._emit(
            self.ARTIFACT_UPLOADED,
            f"Uploaded {key} ({self._format_bytes(byte_size)})",
            key=key, bytes=byte_size, content_type=content_type,
        )
        if self.show_files:
            print(f"  [OK] {key} ({self._format_bytes(byte_size)})")
    
    def on_artifact_deleted(self, key: str) -> None:
        """Called after an artifact has been deleted from the store."""
        self._emit(self.ARTIFACT_DELETED, f"Deleted {key}", key=key)
        if self.show_files:
            print(f"  [DELETED] {key}")
    
    def on_delete_failed(self, key: str, file_hash: str, error: Exception) -> None:
        """Called when deleting one artifact failed; deletion continues."""
        self.logger.error(
            f"Failed to delete {key} (hash {file_hash}): {error}",
            extra={'event': self.DELETE_FAILED, 'key': key, 'file_hash': file_hash},
        )
        if self.show_files:
            print(f"  [ERROR] {key} -> {error}")
    
    def on_upload_skipped(self, file_hash: str, reason: str) -> None:
        """Called when a file is not uploaded at all."""
        self._emit(self.UPLOAD_SKIPPED, f"Skipped {file_hash}: {reason}", file_hash=file_hash)
        if self.show_files:
            print(f"  [SKIP] {file_hash} -> {reason}")
    
    def _emit(self, event: str, message: str, **fields) -> None:
        self.logger.info(message, extra={'event': event, **fields})
    
    @staticmethod
    def _format_bytes(bytes_val: Optional[int]) -> str:
        """Format bytes as human-readable string."""
        if bytes_val is None:
            return "unknown"
        for unit in ['B', 'KB', 'MB', 'GB']:
            if bytes_val < 1024:
                return f"{bytes_val:.1f} {unit}"
            bytes_val /= 1024
        return f"{bytes_val:.1f} TB"
