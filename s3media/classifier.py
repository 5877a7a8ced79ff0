"""
Classifier - Maps file extensions to storage categories and hashes to kinds.
"""

from typing import Optional

IMAGE = 'image'
ICON = 'icon'
FILE = 'file'

ORIGIN = 'origin'
THUMBNAIL = 'thumbnail'

HASH_PREFIX_CONVENTION = 'hash_prefix'
NO_CONVENTION = 'none'

IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.webp', '.tiff'}
ICON_EXTENSIONS = {'.svg'}

THUMBNAIL_PREFIXES = ('thumbnail_', 'small_')


def classify_format(ext: Optional[str]) -> str:
    """
    Classify a file by its extension.
    
    Args:
        ext: Extension including the leading dot (e.g., '.jpg'); may be None
    
    Returns:
        'image', 'icon' or 'file'. Unknown or missing extensions are 'file'.
    """
    ext_lower = (ext or '').lower()
    
    if ext_lower in IMAGE_EXTENSIONS:
        return IMAGE
    if ext_lower in ICON_EXTENSIONS:
        return ICON
    return FILE


def classify_kind(file_hash: str, convention: str = HASH_PREFIX_CONVENTION) -> str:
    """Return 'thumbnail' for hashes carrying a reserved prefix, else 'origin'."""
    if convention == HASH_PREFIX_CONVENTION and file_hash.startswith(THUMBNAIL_PREFIXES):
        return THUMBNAIL
    return ORIGIN


def format_namespace(file_format: str) -> str:
    """Top-level key namespace for a classified format ('images', 'icons', 'files')."""
    return f"{file_format}s"
