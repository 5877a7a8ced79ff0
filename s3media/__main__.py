"""
Main entry point for running the package as a module.

Usage:
    python -m s3media upload photo.jpg --settings settings.json
    python -m s3media plan --hash photo_1a2b3c4d5e --ext .jpg
    python -m s3media delete --hash photo_1a2b3c4d5e --ext .jpg
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
