"""
VariantPlanner - Decides which resized/re-encoded variants a source image gets.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .path_namer import PathNamer
from .size_spec import SizeSpec

ORIGIN_ENCODING = 'origin'
WEBP = 'webp'
AVIF = 'avif'

ALTERNATE_FORMATS = (WEBP, AVIF)

ALTERNATE_MIME_TYPES = {
    WEBP: 'image/webp',
    AVIF: 'image/avif',
}


@dataclass(frozen=True)
class PlannedVariant:
    """
    One variant to render.
    
    Attributes:
        size_name: Name of the SizeSpec this variant belongs to
        encoding: 'origin' for the source-format variant, else 'webp'/'avif'
        fmt: Codec output format, or None to keep the decoded image's format
        ext: Extension of the stored artifact
        mime: Content type of the stored artifact
        key: Storage key
        resize_options: Resize target passed to the codec
        auto_rotate: Apply EXIF orientation before encoding
    """
    size_name: str
    encoding: str
    fmt: Optional[str]
    ext: str
    mime: str
    key: str
    resize_options: Dict[str, Any] = field(default_factory=dict)
    auto_rotate: bool = True
    
    @property
    def width(self) -> Optional[int]:
        return self.resize_options.get('width') or None
    
    @property
    def height(self) -> Optional[int]:
        return self.resize_options.get('height') or None


class VariantPlanner:
    """
    Plans variants per SizeSpec: the primary re-encode first, then webp, then avif.
    
    A webp or avif variant is only planned when requested and the source is
    not already in that format.
    """
    
    PRIMARY_FORMATS = {
        '.jpg': 'jpeg',
        '.jpeg': 'jpeg',
        '.png': 'png',
        '.webp': 'webp',
        '.tiff': 'tiff',
    }
    
    def __init__(self, path_namer: PathNamer):
        self.path_namer = path_namer
    
    @classmethod
    def primary_format(cls, ext: Optional[str]) -> Optional[str]:
        """Codec format for re-encoding a source extension, None to pass through."""
        return cls.PRIMARY_FORMATS.get((ext or '').lower())
    
    @staticmethod
    def wants_alternate(size: SizeSpec, ext: str, fmt: str) -> bool:
        """True if the size requests ``fmt`` and the source isn't already ``fmt``."""
        requested = size.generate_webp if fmt == WEBP else size.generate_avif
        return requested and (ext or '').lower() != f".{fmt}"
    
    def plan(
        self,
        file_hash: str,
        ext: str,
        sizes: Sequence[SizeSpec],
        mime: str = 'application/octet-stream'
    ) -> List[PlannedVariant]:
        """
        Plan every variant for a source image.
        
        Args:
            file_hash: Hash of the source file
            ext: Source extension
            sizes: Ordered size tiers
            mime: Content type of the source, reused for primary variants
        
        Returns:
            Ordered list of PlannedVariant
        """
        variants = []
        primary_fmt = self.primary_format(ext)
        
        for size in sizes:
            resize_options = dict(size.resize_options or {})
            variants.append(PlannedVariant(
                size_name=size.name,
                encoding=ORIGIN_ENCODING,
                fmt=primary_fmt,
                ext=ext,
                mime=mime,
                key=self.path_namer.variant_key(size.name, file_hash, ext),
                resize_options=resize_options,
            ))
            
            for fmt in ALTERNATE_FORMATS:
                if not self.wants_alternate(size, ext, fmt):
                    continue
                variants.append(PlannedVariant(
                    size_name=size.name,
                    encoding=fmt,
                    fmt=fmt,
                    ext=f".{fmt}",
                    mime=ALTERNATE_MIME_TYPES[fmt],
                    key=self.path_namer.alternate_key(size.name, file_hash, fmt),
                    resize_options=resize_options,
                ))
        
        return variants
    
    def planned_keys(self, file_hash: str, ext: str, sizes: Sequence[SizeSpec]) -> List[str]:
        """Ordered, de-duplicated storage keys of every planned variant."""
        keys = []
        for variant in self.plan(file_hash, ext, sizes):
            if variant.key not in keys:
                keys.append(variant.key)
        return keys
