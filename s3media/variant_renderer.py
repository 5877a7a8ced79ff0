"""
VariantRenderer - Turns a variant plan into encoded buffers and metadata.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .exceptions import CodecError
from .file_descriptor import ArtifactMetadata, FileDescriptor, Formats
from .path_namer import PathNamer
from .size_spec import UploadSettings
from .upload_events import UploadEvents
from .variant_planner import PlannedVariant


@dataclass(frozen=True)
class WriteJob:
    """A single object to write to the store."""
    key: str
    body: bytes
    content_type: str


@dataclass
class RenderResult:
    """
    Output of a render pass.
    
    Attributes:
        jobs: Write jobs in store order, origin first
        formats: Variant metadata per size name and encoding
    """
    jobs: List[WriteJob] = field(default_factory=list)
    formats: Formats = field(default_factory=dict)


class VariantRenderer:
    """
    Renders planned variants with an image codec.
    
    Each variant is an independent decode/rotate/resize/encode pass over the
    original bytes, so lossy encodings never stack.
    """
    
    def __init__(
        self,
        codec,
        path_namer: PathNamer,
        settings: UploadSettings,
        events: Optional[UploadEvents] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize renderer.
        
        Args:
            codec: Object with decode/resize/auto_rotate/encode (see PillowCodec)
            path_namer: Key and URL builder
            settings: Upload settings supplying optimize options
            events: Optional event observer
            logger: Optional logger instance
        """
        self.codec = codec
        self.path_namer = path_namer
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.events = events or UploadEvents(logger=self.logger)
    
    def render(
        self,
        file: FileDescriptor,
        origin_key: str,
        plan: Sequence[PlannedVariant]
    ) -> RenderResult:
        """
        Render every planned variant of a file.
        
        Args:
            file: Source file
            origin_key: Key for the unmodified origin buffer
            plan: Variants from VariantPlanner.plan
        
        Returns:
            RenderResult whose first job is the origin buffer
        
        Raises:
            CodecError: If any variant fails; no partial result is returned
        """
        result = RenderResult()
        result.jobs.append(WriteJob(key=origin_key, body=file.buffer, content_type=file.mime))
        
        for variant in plan:
            data = self._render_variant(file, variant)
            
            result.jobs.append(WriteJob(key=variant.key, body=data, content_type=variant.mime))
            result.formats.setdefault(variant.size_name, {})[variant.encoding] = ArtifactMetadata(
                ext=variant.ext,
                url=self.path_namer.url_for(variant.key),
                hash=file.hash,
                mime=variant.mime,
                name=file.name,
                width=variant.width,
                height=variant.height,
                size=len(data) / 1024,
                path=variant.key,
            )
            self.events.on_variant_generated(variant.key, variant.size_name, variant.encoding, len(data))
        
        return result
    
    def _render_variant(self, file: FileDescriptor, variant: PlannedVariant) -> bytes:
        """Decode, rotate, resize and encode one variant from the original bytes."""
        try:
            img = self.codec.decode(file.buffer)
            if variant.auto_rotate:
                img = self.codec.auto_rotate(img)
            img = self.codec.resize(img, variant.resize_options)
            return self.codec.encode(img, variant.fmt, self.settings.options_for(variant.fmt))
        except Exception as e:
            self.logger.error(
                f"Error rendering {variant.key} (hash {file.hash}, size {variant.size_name}): {e}"
            )
            raise CodecError(file.hash, variant.size_name, str(e)) from e
