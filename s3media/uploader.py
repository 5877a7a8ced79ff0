"""
UploadCoordinator - Renders and stores every artifact of an uploaded file.
"""

import logging
from typing import Any, Dict, List, Optional

from .classifier import IMAGE, THUMBNAIL, classify_format, classify_kind
from .file_descriptor import FileDescriptor, UploadResult
from .path_namer import PathNamer
from .size_spec import UploadSettings
from .upload_events import UploadEvents
from .variant_planner import VariantPlanner
from .variant_renderer import VariantRenderer, WriteJob


class UploadCoordinator:
    """
    Uploads a file and, for images, all of its variants.
    
    Everything is rendered before the first write, so a codec failure leaves
    the store untouched. Writes then run one at a time in plan order (origin,
    then per size: primary, webp, avif). The first failed write stops the
    sequence; objects already written stay in place and a retry overwrites
    them under the same keys.
    """
    
    ACL = 'public-read'
    
    def __init__(
        self,
        store,
        renderer: VariantRenderer,
        planner: VariantPlanner,
        path_namer: PathNamer,
        settings: UploadSettings,
        events: Optional[UploadEvents] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize coordinator.
        
        Args:
            store: Object with put(key, body, content_type, acl, extra_params)
            renderer: Variant renderer
            planner: Variant planner
            path_namer: Key and URL builder
            settings: Upload settings
            events: Optional event observer
            logger: Optional logger instance
        """
        self.store = store
        self.renderer = renderer
        self.planner = planner
        self.path_namer = path_namer
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.events = events or UploadEvents(logger=self.logger)
    
    def upload(
        self,
        file: FileDescriptor,
        extra_params: Optional[Dict[str, Any]] = None
    ) -> Optional[UploadResult]:
        """
        Upload a file.
        
        Args:
            file: File to upload; not modified
            extra_params: Extra store parameters merged into every write
        
        Returns:
            UploadResult to apply to the descriptor, or None if the file was
            skipped (no extension, or a derived thumbnail)
        """
        if not file.ext:
            self.events.on_upload_skipped(file.hash, "no file extension")
            return None
        
        if classify_kind(file.hash, self.settings.naming_convention) == THUMBNAIL:
            self.events.on_upload_skipped(file.hash, "derived thumbnail")
            return None
        
        file_format = classify_format(file.ext)
        if file_format != IMAGE:
            key = self.path_namer.file_key(file_format, file.hash, file.ext)
            job = WriteJob(key=key, body=bytes(file.buffer), content_type=file.mime)
            self._write_all(file, [job], extra_params)
            return UploadResult(url=self.path_namer.url_for(key), formats=None, keys=(key,))
        
        origin_key = self.path_namer.origin_key(file.hash, file.ext)
        plan = self.planner.plan(file.hash, file.ext, self.settings.image_sizes, mime=file.mime)
        rendered = self.renderer.render(file, origin_key, plan)
        
        self._write_all(file, rendered.jobs, extra_params)
        
        return UploadResult(
            url=self.path_namer.url_for(origin_key),
            formats=rendered.formats,
            keys=tuple(job.key for job in rendered.jobs),
        )
    
    def _write_all(
        self,
        file: FileDescriptor,
        jobs: List[WriteJob],
        extra_params: Optional[Dict[str, Any]]
    ) -> None:
        """Write jobs sequentially, stopping at the first failure."""
        for job in jobs:
            try:
                self.store.put(job.key, job.body, job.content_type, self.ACL, extra_params or {})
            except Exception as e:
                self.logger.error(f"Error uploading {job.key} (hash {file.hash}): {e}")
                raise
            self.events.on_artifact_uploaded(job.key, len(job.body), job.content_type)
