"""
MediaProvider - Wires the pipeline together and exposes upload/delete.
"""

import logging
from typing import Any, Dict, List, Optional

from .deleter import DeletionCoordinator
from .file_descriptor import FileDescriptor, UploadResult
from .image_codec import PillowCodec
from .path_namer import PathNamer
from .s3_client import S3Client
from .s3_config import S3Config
from .size_spec import UploadSettings
from .upload_events import UploadEvents
from .uploader import UploadCoordinator
from .variant_planner import VariantPlanner
from .variant_renderer import VariantRenderer


class MediaProvider:
    """
    Upload provider for a bucket.
    
    Holds only read-only configuration and stateless collaborators, so one
    instance can serve many files, including concurrently from the host.
    """
    
    def __init__(
        self,
        store,
        settings: UploadSettings,
        base_url: str,
        codec=None,
        events: Optional[UploadEvents] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize provider.
        
        Args:
            store: Object store with put/delete (see S3Client)
            settings: Upload settings
            base_url: Public base URL for stored objects
            codec: Image codec, PillowCodec by default
            events: Optional event observer
            logger: Optional logger instance
        """
        errors = settings.validate()
        if errors:
            raise ValueError(f"Invalid upload settings: {'; '.join(errors)}")
        
        self.logger = logger or logging.getLogger(__name__)
        self.settings = settings
        self.store = store
        self.events = events or UploadEvents(logger=self.logger)
        self.path_namer = PathNamer(base_url, settings.alternate_layout)
        self.planner = VariantPlanner(self.path_namer)
        self.renderer = VariantRenderer(
            codec or PillowCodec(logger=self.logger),
            self.path_namer,
            settings,
            events=self.events,
            logger=self.logger,
        )
        self.uploader = UploadCoordinator(
            store, self.renderer, self.planner, self.path_namer, settings,
            events=self.events, logger=self.logger,
        )
        self.deleter = DeletionCoordinator(
            store, self.planner, self.path_namer, settings,
            events=self.events, logger=self.logger,
        )
    
    @classmethod
    def from_config(
        cls,
        settings: UploadSettings,
        s3_config: S3Config,
        events: Optional[UploadEvents] = None,
        logger: Optional[logging.Logger] = None
    ) -> 'MediaProvider':
        """Build a provider backed by S3."""
        errors = s3_config.validate()
        if errors:
            raise ValueError(f"Invalid S3 configuration: {'; '.join(errors)}")
        
        store = S3Client(s3_config, logger)
        return cls(store, settings, s3_config.base_url, events=events, logger=logger)
    
    def upload(
        self,
        file: FileDescriptor,
        extra_params: Optional[Dict[str, Any]] = None
    ) -> Optional[UploadResult]:
        """
        Upload a file and, on success, set ``file.url`` and ``file.formats``.
        
        The descriptor is left untouched if anything fails.
        """
        result = self.uploader.upload(file, extra_params)
        if result is not None:
            result.apply_to(file)
        return result
    
    def delete(
        self,
        file: FileDescriptor,
        extra_params: Optional[Dict[str, Any]] = None
    ) -> List[str]:
        """Delete every artifact of a file. Raises DeletionError after a partial failure."""
        return self.deleter.delete(file, extra_params)
    
    def planned_keys(self, file: FileDescriptor) -> List[str]:
        """Keys delete removes for a file; for uploadable files, exactly the keys upload writes."""
        return self.deleter.keys_for(file)
