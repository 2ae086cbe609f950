# File: unpacked/api/v1/routes_upload.py

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from unpacked.api.deps import get_current_user, get_image_storage
from unpacked.core.errors import InvalidInputError
from unpacked.models.user import User
from unpacked.schemas.upload import UploadResponse
from unpacked.services.storage import MAX_UPLOAD_SIZE, ImageStorage, store_image

router = APIRouter(tags=["upload"])


@router.post("/upload", response_model=UploadResponse, summary="Upload an outfit or item image")
def upload_image(
    file: Optional[UploadFile] = File(None),
    user: User = Depends(get_current_user),
    storage: ImageStorage = Depends(get_image_storage),
):
    """
    Accepts a single JPEG, PNG or WebP image up to 5MB.

    Returns: {"imageUrl": <url>}
    """
    if file is None:
        raise InvalidInputError("No file provided")

    # Runs in the threadpool; the read and the storage write both block.
    # One byte past the limit is enough to know it is too large
    data = file.file.read(MAX_UPLOAD_SIZE + 1)
    image_url = store_image(
        storage,
        original_name=file.filename,
        content_type=file.content_type,
        data=data,
    )
    return UploadResponse(image_url=image_url)
