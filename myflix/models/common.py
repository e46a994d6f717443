# Shared field types and the error envelope
# myflix/models/common.py

from typing import Annotated, Any, Optional

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, Field


def _validate_object_id(value: Any) -> str:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, str) and ObjectId.is_valid(value):
        return value
    raise ValueError(f"'{value}' is not a valid ObjectId")


# ObjectId on the way in (from Mongo or JSON), plain 24-hex string on the way out
PyObjectId = Annotated[str, BeforeValidator(_validate_object_id)]


class ErrorResponse(BaseModel):
    """Envelope returned by every failing route."""
    kind: str = Field(..., description="Machine-readable error category.")
    message: str = Field(..., description="Human-readable summary.")
    detail: Optional[Any] = Field(None, description="Field-level or diagnostic detail, if any.")
