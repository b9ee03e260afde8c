"""
Document storage for achievement evidence
Local filesystem for development, S3 for production; both expose the same
put / get_public_url / delete interface so callers never branch on backend.
"""

from pathlib import Path
from typing import Optional

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from achievehub.config import settings
from achievehub.core.exceptions import StorageError

logger = structlog.get_logger(__name__)

CONTENT_TYPES = {
    "pdf": "application/pdf",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
}


def document_path(owner_id, timestamp_ms: int, extension: str) -> str:
    """Object key for an uploaded document: ``{owner_id}/{timestamp}.{ext}``."""
    return f"{owner_id}/{timestamp_ms}.{extension.lower()}"


class LocalDocumentStorage:
    """Stores documents under a directory and serves them through the API."""

    def __init__(self, root_dir: Optional[str] = None, public_base_url: Optional[str] = None):
        self.root = Path(root_dir or settings.DOCUMENT_STORAGE_DIR)
        self.public_base_url = (public_base_url or settings.DOCUMENT_PUBLIC_BASE_URL).rstrip("/")

    def resolve(self, path: str) -> Path:
        """Absolute file location for a key; keys may not escape the root."""
        root = self.root.resolve()
        target = (root / path).resolve()
        if root != target and root not in target.parents:
            raise StorageError("Invalid document path")
        return target

    def put(self, path: str, content: bytes, content_type: Optional[str] = None) -> str:
        try:
            target = self.resolve(path)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            logger.error("document_store_failed", path=path, error=str(e))
            raise StorageError("Failed to upload document") from e

        logger.info("document_stored", path=path, size=len(content), backend="local")
        return self.get_public_url(path)

    def get_public_url(self, path: str) -> str:
        return f"{self.public_base_url}/{path}"

    def delete(self, path: str) -> None:
        try:
            target = self.resolve(path)
            if target.exists():
                target.unlink()
        except OSError as e:
            logger.warning("document_delete_failed", path=path, error=str(e))


class S3DocumentStorage:
    """Stores documents in an S3 bucket with public-read style URLs."""

    def __init__(self, bucket: Optional[str] = None, client=None):
        self.bucket = bucket or settings.S3_BUCKET_NAME
        self.client = client or boto3.client(
            "s3",
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
            region_name=settings.AWS_REGION,
        )

    def put(self, path: str, content: bytes, content_type: Optional[str] = None) -> str:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=path,
                Body=content,
                ContentType=content_type or "application/octet-stream",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("document_store_failed", path=path, error=str(e))
            raise StorageError("Failed to upload document") from e

        logger.info("document_stored", path=path, size=len(content), backend="s3")
        return self.get_public_url(path)

    def get_public_url(self, path: str) -> str:
        return f"https://{self.bucket}.s3.{settings.AWS_REGION}.amazonaws.com/{path}"

    def delete(self, path: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=path)
        except (BotoCoreError, ClientError) as e:
            logger.warning("document_delete_failed", path=path, error=str(e))


_storage = None


def get_document_storage():
    """
    Get the configured storage backend (dependency for endpoints).

    DOCUMENT_STORAGE_TYPE=s3 selects S3, anything else the local directory.
    """
    global _storage
    if _storage is None:
        if settings.DOCUMENT_STORAGE_TYPE.lower() == "s3":
            _storage = S3DocumentStorage()
        else:
            _storage = LocalDocumentStorage()
    return _storage
