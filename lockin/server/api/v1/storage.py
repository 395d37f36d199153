"""
API endpoints for object storage uploads.
"""

from __future__ import annotations

from fastapi import APIRouter

from lockin.core.models.io.shared_videos import UploadUrlRead, UploadUrlRequest
from lockin.server.auth import IdentityDep
from lockin.server.services.deps import StorageDep

router = APIRouter(tags=["storage"])


@router.post(
    "/upload-url",
    response_model=UploadUrlRead,
    summary="Create Upload URL",
    description="Reserve an object key and return a presigned PUT URL for uploading a video or thumbnail.",
    responses={401: {"description": "Unauthenticated call"}},
)
async def create_upload_url(data: UploadUrlRequest, identity: IdentityDep, storage: StorageDep) -> UploadUrlRead:
    """
    Create a presigned upload URL.

    - **kind**: ``video`` or ``thumbnail``; decides the key prefix.
    - **content_type**: MIME type the client must send with the PUT.
    """
    key = storage.new_object_key(data.kind, data.content_type)
    url = storage.presigned_put_url(key, data.content_type)
    return UploadUrlRead(url=url, key=key, expires_in=storage.expires_in)
