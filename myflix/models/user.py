# myflix/models/user.py

from datetime import date, datetime
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, field_validator

from myflix.core.security import MAX_PASSWORD_BYTES
from myflix.models.common import PyObjectId


def _as_date(value: Any) -> Any:
    # Mongo stores dates as datetimes at midnight
    if isinstance(value, datetime):
        return value.date()
    return value


StoredDate = Annotated[date, BeforeValidator(_as_date)]


# --- Base Model ---
class UserBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., alias="Username", min_length=1, description="Login name.")
    email: EmailStr = Field(..., alias="Email", description="User's email address.")
    birthday: Optional[StoredDate] = Field(None, alias="Birthday", description="Date of birth.")
    favorite_movies: List[PyObjectId] = Field(
        default_factory=list,
        alias="FavoriteMovies",
        description="Movie ids; existence and duplicates are not checked.",
    )


# --- Model for registration requests ---
class UserCreate(UserBase):
    """Data required to register a new user (POST /users)."""
    password: str = Field(..., alias="Password", min_length=1, description="Plaintext password.")

    @field_validator("password")
    @classmethod
    def password_fits_hasher(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


# --- Model for API Responses / storage ---
class UserRead(UserBase):
    """
    Stored user as returned after registration.

    ``password`` holds the bcrypt digest, never the submitted plaintext.
    """
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: PyObjectId = Field(..., alias="_id", description="Internal database ID (MongoDB ObjectId).")
    password: str = Field(..., alias="Password", description="bcrypt digest of the password.")


class LoginRequest(BaseModel):
    """Credentials for POST /login."""
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., alias="Username")
    password: str = Field(..., alias="Password")
