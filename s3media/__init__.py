"""
Media upload pipeline for S3.

Stores an uploaded file as-is and, for images, a configurable set of resized
variants with optional webp/avif encodings, under deterministic keys so that
delete can remove exactly what upload wrote.
"""

__version__ = "1.0.0"

from .classifier import classify_format, classify_kind
from .exceptions import CodecError, DeletionError
from .file_descriptor import ArtifactMetadata, FileDescriptor, UploadResult
from .size_spec import SizeSpec, UploadSettings
from .s3_config import S3Config
from .s3_client import S3Client
from .path_namer import PathNamer
from .image_codec import PillowCodec
from .variant_planner import PlannedVariant, VariantPlanner
from .variant_renderer import RenderResult, VariantRenderer, WriteJob
from .upload_events import UploadEvents
from .uploader import UploadCoordinator
from .deleter import DeletionCoordinator
from .provider import MediaProvider

__all__ = [
    "classify_format",
    "classify_kind",
    "CodecError",
    "DeletionError",
    "ArtifactMetadata",
    "FileDescriptor",
    "UploadResult",
    "SizeSpec",
    "UploadSettings",
    "S3Config",
    "S3Client",
    "PathNamer",
    "PillowCodec",
    "PlannedVariant",
    "VariantPlanner",
    "RenderResult",
    "VariantRenderer",
    "WriteJob",
    "UploadEvents",
    "UploadCoordinator",
    "DeletionCoordinator",
    "MediaProvider",
]
