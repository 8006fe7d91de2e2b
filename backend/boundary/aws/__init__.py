"""
AWS boundary modules.

Exports: S3BlobStore, StoredBlob
"""

from .s3_client import S3BlobStore, StoredBlob

__all__ = ["S3BlobStore", "StoredBlob"]
