# myflix/models/image.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ImageUploadRequest(BaseModel):
    """
    Body of POST /upload.

    Every field is optional at the schema level; presence is checked by the
    image service so a missing field is reported as an upload input error
    before any storage call.
    """
    image: Optional[str] = Field(None, description="Base64-encoded image bytes.")
    filename: Optional[str] = Field(None, description="Original file name.")
    mimetype: Optional[str] = Field(None, description="Content type, e.g. image/png.")


class ImageUploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl", description="Public URL of the stored object.")
