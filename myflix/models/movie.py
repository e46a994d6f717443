# myflix/models/movie.py

from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from myflix.models.common import PyObjectId


def _none_as(default: Any):
    """Maps a stored ``null`` onto the field's default."""
    def convert(value: Any) -> Any:
        return default() if value is None else value
    return BeforeValidator(convert)


class Genre(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, alias="Name")
    description: Optional[str] = Field(None, alias="Description")


class Director(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, alias="Name")
    bio: Optional[str] = Field(None, alias="Bio")


# --- Base Model ---
class MovieBase(BaseModel):
    """Attributes shared by loaded and stored movies."""
    model_config = ConfigDict(populate_by_name=True)

    genre: Optional[Genre] = Field(None, description="Genre name and description.")
    director: Optional[Director] = Field(None, description="Director name and biography.")
    actors: Annotated[List[str], _none_as(list)] = Field(
        default_factory=list, description="Cast, in billing order."
    )
    image_path: Optional[str] = Field(None, alias="ImagePath", description="Poster URL or storage key.")
    featured: Annotated[bool, _none_as(lambda: False)] = Field(
        False, alias="Featured", description="Whether to highlight the movie."
    )


# --- Model for inserts (out-of-band loading) ---
class MovieCreate(MovieBase):
    """Movie as accepted by the loading tooling. Title and description are mandatory."""
    title: str = Field(..., min_length=1, description="Movie title.")
    description: str = Field(..., min_length=1, description="Movie synopsis.")


# --- Model for API Responses ---
class MovieRead(MovieBase):
    """
    Movie document as returned by GET /movies.

    Built straight from the stored Mongo document, which nothing validated on
    the way in: missing text fields stay ``None`` and ``null`` lists/flags
    fall back to their defaults. ``_id`` is rendered as a 24-hex string.
    """
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: PyObjectId = Field(..., alias="_id", description="Internal database ID (MongoDB ObjectId).")
    title: Optional[str] = Field(None, description="Movie title.")
    description: Optional[str] = Field(None, description="Movie synopsis.")
