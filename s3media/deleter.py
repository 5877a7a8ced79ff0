"""
DeletionCoordinator - Removes every artifact an upload could have written.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .classifier import IMAGE, THUMBNAIL, classify_format, classify_kind
from .exceptions import DeletionError
from .file_descriptor import FileDescriptor
from .path_namer import PathNamer
from .size_spec import UploadSettings
from .upload_events import UploadEvents
from .variant_planner import VariantPlanner


class DeletionCoordinator:
    """
    Deletes a file's artifacts.
    
    Keys are recomputed from (hash, ext, image sizes) with the same planner
    the uploader uses; ``file.formats`` is never consulted. Every key is
    attempted even if earlier deletes fail.
    """
    
    def __init__(
        self,
        store,
        planner: VariantPlanner,
        path_namer: PathNamer,
        settings: UploadSettings,
        events: Optional[UploadEvents] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize coordinator.
        
        Args:
            store: Object with delete(key, extra_params)
            planner: Variant planner shared with the uploader
            path_namer: Key builder
            settings: Upload settings
            events: Optional event observer
            logger: Optional logger instance
        """
        self.store = store
        self.planner = planner
        self.path_namer = path_namer
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.events = events or UploadEvents(logger=self.logger)
    
    def keys_for(self, file: FileDescriptor) -> List[str]:
        """Every storage key belonging to a file, in delete order."""
        if not file.ext:
            # Upload skips these, so there is nothing to delete
            return []
        
        file_format = classify_format(file.ext)
        if file_format != IMAGE:
            return [self.path_namer.file_key(file_format, file.hash, file.ext)]
        
        kind = classify_kind(file.hash, self.settings.naming_convention)
        keys = [self.path_namer.origin_key(file.hash, file.ext, kind)]
        
        # Derived thumbnails never had variants of their own
        if kind != THUMBNAIL:
            for key in self.planner.planned_keys(file.hash, file.ext, self.settings.image_sizes):
                if key not in keys:
                    keys.append(key)
        
        return keys
    
    def delete(
        self,
        file: FileDescriptor,
        extra_params: Optional[Dict[str, Any]] = None
    ) -> List[str]:
        """
        Delete all artifacts of a file.
        
        Args:
            file: File to delete; not modified
            extra_params: Extra store parameters merged into every delete
        
        Returns:
            Keys deleted
        
        Raises:
            DeletionError: After attempting every key, if any delete failed
        """
        deleted = []
        failures: List[Tuple[str, Exception]] = []
        
        for key in self.keys_for(file):
            try:
                self.store.delete(key, extra_params or {})
            except Exception as e:
                self.events.on_delete_failed(key, file.hash, e)
                failures.append((key, e))
                continue
            deleted.append(key)
            self.events.on_artifact_deleted(key)
        
        if failures:
            raise DeletionError(failures)
        
        return deleted
