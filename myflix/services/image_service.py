# myflix/services/image_service.py

import logging
from typing import List

from myflix.core.exceptions import UploadInputError
from myflix.data_access.storage_client import ObjectStorageClient
from myflix.models.image import ImageUploadRequest
from myflix.utils.helpers import (
    THUMBNAIL_PREFIX,
    build_upload_key,
    decode_base64_payload,
    sanitize_filename,
)

logger = logging.getLogger(__name__)


class ImageService:
    def __init__(self, storage: ObjectStorageClient):
        self.storage = storage

    async def upload_image(self, upload: ImageUploadRequest) -> str:
        """
        Stores a base64 image under ``original-images/`` and returns its URL.

        All input checks run before the storage call, so a rejected request
        never writes anything.

        Raises:
            UploadInputError: A field is missing or empty, the image is not
                valid base64, or the filename sanitizes to nothing.
            StorageError: If the object store rejects the write.
        """
        missing = [name for name in ("image", "filename", "mimetype") if not getattr(upload, name)]
        if missing:
            raise UploadInputError(detail={"missing": missing})

        body = decode_base64_payload(upload.image)
        if body is None:
            raise UploadInputError("Image is not valid base64.")

        safe_name = sanitize_filename(upload.filename)
        if not safe_name:
            raise UploadInputError("Filename has no usable characters.", detail={"filename": upload.filename})

        key = build_upload_key(safe_name)
        return await self.storage.put_object(key, body, upload.mimetype)

    async def list_thumbnails(self) -> List[str]:
        """Public URLs of every object under ``thumbnails/``."""
        keys = await self.storage.list_objects(THUMBNAIL_PREFIX)
        return [self.storage.public_url(key) for key in keys]
