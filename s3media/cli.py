"""
Command Line Interface for uploading and deleting media.
"""

import argparse
import hashlib
import json
import logging
import re
import urllib3
from mimetypes import guess_type
from pathlib import Path
from typing import List, Optional

from .exceptions import DeletionError
from .file_descriptor import FileDescriptor
from .provider import MediaProvider
from .s3_config import S3Config
from .size_spec import UploadSettings
from .upload_events import UploadEvents


def setup_logging(verbose: bool) -> logging.Logger:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    
    logging.getLogger('boto3').setLevel(logging.WARNING)
    logging.getLogger('botocore').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('PIL').setLevel(logging.WARNING)
    
    return logging.getLogger('s3media')


def get_s3_config(args: argparse.Namespace) -> S3Config:
    """Get S3 configuration from environment and CLI overrides."""
    config = S3Config.from_env()
    
    if getattr(args, 's3_bucket', None):
        config.bucket = args.s3_bucket
    if getattr(args, 's3_region', None):
        config.region = args.s3_region
    if getattr(args, 's3_cdn', None):
        config.cdn = args.s3_cdn
    if getattr(args, 's3_endpoint', None):
        config.endpoint = args.s3_endpoint
    if getattr(args, 's3_access_key', None):
        config.access_key = args.s3_access_key
    if getattr(args, 's3_secret_key', None):
        config.secret_key = args.s3_secret_key
    
    return config


def get_settings(args: argparse.Namespace) -> UploadSettings:
    """Load upload settings from --settings, or defaults (no image sizes)."""
    if getattr(args, 'settings', None):
        return UploadSettings.load(args.settings)
    return UploadSettings()


def load_settings(args: argparse.Namespace, logger: logging.Logger) -> UploadSettings:
    """
    Load and validate upload settings, logging any problem.
    
    Raises:
        ValueError: If the settings file is missing, unreadable or invalid
    """
    try:
        settings = get_settings(args)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.error(f"Settings not found or invalid: {args.settings} ({e})")
        raise ValueError("Settings invalid") from e
    
    errors = settings.validate()
    if errors:
        for error in errors:
            logger.error(error)
        raise ValueError("Settings invalid")
    return settings


def file_hash_for(path: Path, data: bytes) -> str:
    """Content-derived hash: sanitized file stem plus a sha256 prefix."""
    stem = re.sub(r'[^a-z0-9]+', '_', path.stem.lower()).strip('_') or 'file'
    return f"{stem}_{hashlib.sha256(data).hexdigest()[:10]}"


def descriptor_for_path(path: Path, file_hash: Optional[str] = None, name: Optional[str] = None) -> FileDescriptor:
    """Build a FileDescriptor for a local file."""
    data = path.read_bytes()
    mime = guess_type(path.name)[0] or 'application/octet-stream'
    return FileDescriptor(
        hash=file_hash or file_hash_for(path, data),
        ext=path.suffix.lower() or None,
        mime=mime,
        buffer=data,
        name=name or path.name,
    )


def add_storage_arguments(parser: argparse.ArgumentParser) -> None:
    """Add storage configuration arguments to a parser."""
    s3_group = parser.add_argument_group('S3 Storage')
    s3_group.add_argument('--s3-bucket', help='Override S3_BUCKET')
    s3_group.add_argument('--s3-region', help='Override S3_REGION')
    s3_group.add_argument('--s3-cdn', help='Override S3_CDN (public base URL)')
    s3_group.add_argument('--s3-endpoint', help='Override S3_ENDPOINT')
    s3_group.add_argument('--s3-access-key', help='Override S3_ACCESS_KEY')
    s3_group.add_argument('--s3-secret-key', help='Override S3_SECRET_KEY')


def build_provider(args: argparse.Namespace, logger: logging.Logger) -> MediaProvider:
    """Create a provider from settings and S3 configuration."""
    settings = load_settings(args, logger)
    config = get_s3_config(args)
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        raise ValueError("Configuration invalid")
    
    events = UploadEvents(show_files=getattr(args, 'show_files', False), logger=logger)
    return MediaProvider.from_config(settings, config, events=events, logger=logger)


def cmd_upload(args: argparse.Namespace) -> int:
    """Execute upload command."""
    logger = setup_logging(args.verbose)
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
    
    path = Path(args.path)
    if not path.is_file():
        logger.error(f"File not found: {args.path}")
        return 1
    
    try:
        provider = build_provider(args, logger)
    except ValueError:
        return 1
    
    try:
        file = descriptor_for_path(path, file_hash=args.hash, name=args.name)
        logger.info(f"Uploading {path.name} as {file.hash}{file.ext or ''}")
        
        result = provider.upload(file)
        if result is None:
            logger.warning(f"Nothing uploaded for {file.hash}")
            return 0
        
        print(json.dumps({
            'hash': file.hash,
            'ext': file.ext,
            'url': file.url,
            'formats': file.formats_to_dict(),
        }, indent=2))
        return 0
    
    except Exception as e:
        logger.exception(f"Upload failed: {e}")
        return 1


def cmd_delete(args: argparse.Namespace) -> int:
    """Execute delete command."""
    logger = setup_logging(args.verbose)
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
    
    try:
        provider = build_provider(args, logger)
    except ValueError:
        return 1
    
    file = FileDescriptor(hash=args.hash, ext=args.ext.lower(), mime='application/octet-stream')
    try:
        deleted = provider.delete(file)
        logger.info(f"Deleted {len(deleted)} object(s) for {file.hash}")
        return 0
    except DeletionError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.exception(f"Delete failed: {e}")
        return 1


def cmd_plan(args: argparse.Namespace) -> int:
    """Execute plan command: print the keys for a file without touching storage."""
    logger = setup_logging(args.verbose)
    
    try:
        settings = load_settings(args, logger)
    except ValueError:
        return 1
    
    config = get_s3_config(args)
    provider = MediaProvider(store=None, settings=settings, base_url=config.base_url, logger=logger)
    file = FileDescriptor(hash=args.hash, ext=args.ext.lower(), mime='application/octet-stream')
    for key in provider.planned_keys(file):
        print(f"{key}\t{provider.path_namer.url_for(key)}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog='s3media',
        description='Upload media with resized variants to S3, or delete it again',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Upload an image using sizes from settings.json
  python -m s3media upload photo.jpg --settings settings.json

  # Show the keys an image would be stored under
  python -m s3media plan --hash photo_1a2b3c4d5e --ext .jpg --settings settings.json

  # Delete an image and all its variants
  python -m s3media delete --hash photo_1a2b3c4d5e --ext .jpg --settings settings.json

Environment:
  S3_BUCKET, S3_REGION, S3_CDN, S3_ENDPOINT, S3_ACCESS_KEY, S3_SECRET_KEY, S3_VERIFY_SSL
        """
    )
    
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    
    subparsers = parser.add_subparsers(dest='command', help='Command to run')
    
    # Upload command
    upload_parser = subparsers.add_parser('upload', help='Upload a file and its variants')
    upload_parser.add_argument('path', help='File to upload')
    upload_parser.add_argument('--hash', help='Hash to store the file under (default: derived from content)')
    upload_parser.add_argument('--name', help='Display name (default: file name)')
    upload_parser.add_argument('--settings', help='Upload settings JSON file')
    upload_parser.add_argument('--show-files', action='store_true', help='Print each artifact as uploaded')
    upload_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    add_storage_arguments(upload_parser)
    
    # Delete command
    delete_parser = subparsers.add_parser('delete', help='Delete a file and its variants')
    delete_parser.add_argument('--hash', required=True, help='Stored file hash')
    delete_parser.add_argument('--ext', required=True, help='Stored file extension (e.g., .jpg)')
    delete_parser.add_argument('--settings', help='Upload settings JSON file')
    delete_parser.add_argument('--show-files', action='store_true', help='Print each artifact as deleted')
    delete_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    add_storage_arguments(delete_parser)
    
    # Plan command
    plan_parser = subparsers.add_parser('plan', help='Print storage keys for a file')
    plan_parser.add_argument('--hash', required=True, help='File hash')
    plan_parser.add_argument('--ext', required=True, help='File extension (e.g., .jpg)')
    plan_parser.add_argument('--settings', help='Upload settings JSON file')
    plan_parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    add_storage_arguments(plan_parser)
    
    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    
    if not parsed_args.command:
        parser.print_help()
        return 1
    
    if parsed_args.command == 'upload':
        return cmd_upload(parsed_args)
    elif parsed_args.command == 'delete':
        return cmd_delete(parsed_args)
    elif parsed_args.command == 'plan':
        return cmd_plan(parsed_args)
    
    return 1
