# myflix/api/endpoints/images.py

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from myflix.api.deps import get_image_service
from myflix.models.common import ErrorResponse
from myflix.models.image import ImageUploadRequest, ImageUploadResponse
from myflix.services.image_service import ImageService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/upload",
    response_model=ImageUploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Upload Image",
    description="Stores a base64-encoded image under original-images/ and returns its public URL.",
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid image, filename or mimetype"},
        500: {"model": ErrorResponse, "description": "Object storage error"},
    },
)
async def upload_image(
    upload: ImageUploadRequest,
    image_service: ImageService = Depends(get_image_service),
):
    image_url = await image_service.upload_image(upload)
    return ImageUploadResponse(image_url=image_url)


@router.get(
    "/images",
    response_model=List[str],
    status_code=status.HTTP_200_OK,
    summary="List Thumbnails",
    description="Public URLs of every object under thumbnails/.",
    responses={
        500: {"model": ErrorResponse, "description": "Object storage error"},
    },
)
async def list_images(
    image_service: ImageService = Depends(get_image_service),
):
    return await image_service.list_thumbnails()
