"""
Serves documents kept by the local storage backend
(S3 documents are linked directly to the bucket)
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from achievehub.core.exceptions import NotFound
from achievehub.services.storage_service import (
    CONTENT_TYPES,
    LocalDocumentStorage,
    get_document_storage,
)
from achievehub.utils.validators import file_extension

router = APIRouter()


@router.get("/{owner_id}/{filename}")
async def get_document(owner_id: UUID, filename: str, storage=Depends(get_document_storage)):
    if not isinstance(storage, LocalDocumentStorage):
        raise NotFound("Document not found")

    target = storage.resolve(f"{owner_id}/{filename}")
    if not target.is_file():
        raise NotFound("Document not found")

    return FileResponse(
        target,
        media_type=CONTENT_TYPES.get(file_extension(filename), "application/octet-stream"),
        filename=filename,
    )
