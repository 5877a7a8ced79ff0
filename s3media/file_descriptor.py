"""
FileDescriptor - An uploaded file and the metadata recorded for its artifacts.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Optional


@dataclass(frozen=True)
class ArtifactMetadata:
    """
    Metadata for one stored artifact.
    
    Attributes:
        ext: Extension of the stored artifact (e.g., '.webp')
        url: Public URL
        hash: Hash of the source file
        mime: Content type of the stored artifact
        name: Display name of the source file
        width: Requested width, or None if not constrained
        height: Requested height, or None if not constrained
        size: Size in KB
        path: Storage key; also what delete removes
    """
    ext: str
    url: str
    hash: str
    mime: str
    name: Optional[str]
    width: Optional[int]
    height: Optional[int]
    size: float
    path: str
    
    def to_dict(self) -> dict:
        return asdict(self)
    
    @classmethod
    def from_dict(cls, data: dict) -> 'ArtifactMetadata':
        return cls(**data)


# size name -> encoding name ('origin', 'webp', 'avif') -> metadata
Formats = Dict[str, Dict[str, ArtifactMetadata]]


@dataclass
class FileDescriptor:
    """
    A file handed to the uploader.
    
    Owned by the caller. ``url`` and ``formats`` are filled in from an
    UploadResult after a successful upload; everything else is input.
    
    Attributes:
        hash: Content-derived identifier, may carry a kind prefix
        ext: Lowercase extension including the dot
        mime: Content type
        buffer: Raw bytes of the upload, never modified
        name: Display name
        url: Public URL of the origin artifact, set by upload
        formats: Variant metadata per size, set by upload for images
    """
    hash: str
    ext: Optional[str]
    mime: str
    buffer: bytes = b''
    name: Optional[str] = None
    url: Optional[str] = None
    formats: Optional[Formats] = None
    
    def formats_to_dict(self) -> Optional[dict]:
        """Serialize formats for JSON output."""
        if self.formats is None:
            return None
        return {
            size_name: {enc: meta.to_dict() for enc, meta in encodings.items()}
            for size_name, encodings in self.formats.items()
        }


@dataclass(frozen=True)
class UploadResult:
    """
    Fields produced by a successful upload.
    
    Attributes:
        url: Public URL of the origin artifact
        formats: Variant metadata per size, None for non-image files
        keys: Every storage key written, in write order
    """
    url: str
    formats: Optional[Formats]
    keys: tuple = ()
    
    def apply_to(self, file: FileDescriptor) -> FileDescriptor:
        """Copy url and formats onto the descriptor."""
        file.url = self.url
        if self.formats is not None:
            file.formats = self.formats
        return file
