"""
PathNamer - Builds storage keys and public URLs for every stored artifact.
"""

from .classifier import IMAGE, ORIGIN, format_namespace
from .size_spec import FLAT_LAYOUT, FORMAT_SUBFOLDER_LAYOUT


class PathNamer:
    """
    Deterministic key and URL construction.
    
    Keys depend only on their arguments, so the same call made at upload
    and at delete time always names the same object.
    
    Layout:
        images/<kind>/<hash><ext>          origin
        images/<size>/<hash><ext>          resized primary
        images/<size>/<hash>.<fmt>         webp/avif ('flat' layout)
        images/<fmt>/<size>/<hash>.<fmt>   webp/avif ('format_subfolder' layout)
        <format>s/<hash><ext>              icons and other files
    """
    
    def __init__(self, base_url: str, alternate_layout: str = FLAT_LAYOUT):
        if alternate_layout not in (FLAT_LAYOUT, FORMAT_SUBFOLDER_LAYOUT):
            raise ValueError(f"Unknown alternate layout: {alternate_layout}")
        self.base_url = base_url.rstrip('/')
        self.alternate_layout = alternate_layout
        self.image_namespace = format_namespace(IMAGE)
    
    def origin_key(self, file_hash: str, ext: str, kind: str = ORIGIN) -> str:
        """Key for the unmodified upload."""
        return f"{self.image_namespace}/{kind}/{file_hash}{ext}"
    
    def variant_key(self, size_name: str, file_hash: str, ext: str) -> str:
        """Key for a resized variant in the source's own format."""
        return f"{self.image_namespace}/{size_name}/{file_hash}{ext}"
    
    def alternate_key(self, size_name: str, file_hash: str, fmt: str) -> str:
        """Key for a resized variant re-encoded as 'webp' or 'avif'."""
        if self.alternate_layout == FORMAT_SUBFOLDER_LAYOUT:
            return f"{self.image_namespace}/{fmt}/{size_name}/{file_hash}.{fmt}"
        return f"{self.image_namespace}/{size_name}/{file_hash}.{fmt}"
    
    @staticmethod
    def file_key(file_format: str, file_hash: str, ext: str) -> str:
        """Key for a non-image file (icons, documents, ...)."""
        return f"{format_namespace(file_format)}/{file_hash}{ext or ''}"
    
    def url_for(self, key: str) -> str:
        """Public URL for a storage key."""
        return f"{self.base_url}/{key}"
