# File: unpacked/schemas/upload.py

from unpacked.schemas.common import APIModel


class UploadResponse(APIModel):
    image_url: str
