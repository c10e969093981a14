"""
Storage Service Package

Backends for uploaded media.

Key Components:
- ObjectUploader: Abstract base class for bucket uploads
- ThumbnailStore: Abstract base class for thumbnail storage
- S3Uploader: S3 bucket implementation
- DiskThumbnailStore: Thumbnails written under the assets root
- MemoryThumbnailStore: Thumbnails held in a lock-protected map
"""

from .interfaces import ObjectUploader, StorageError, ThumbnailStore
from .s3_uploader import S3Config, S3Uploader
from .thumbnail_store import DiskThumbnailStore, MemoryThumbnailStore, random_name

__all__ = [
    # Interfaces
    'ObjectUploader',
    'ThumbnailStore',
    'StorageError',

    # Implementations
    'S3Config',
    'S3Uploader',
    'DiskThumbnailStore',
    'MemoryThumbnailStore',

    'random_name',
]
