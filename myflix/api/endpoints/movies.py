# myflix/api/endpoints/movies.py

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from pymongo.errors import PyMongoError

from myflix.api.deps import get_movie_service
from myflix.core.exceptions import StorageError
from myflix.models.common import ErrorResponse
from myflix.models.movie import MovieRead
from myflix.services.movie_service import MovieService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "",  # GET /movies
    response_model=List[MovieRead],
    status_code=status.HTTP_200_OK,
    summary="List Movies",
    description="Retrieve every movie. An empty collection yields an empty list.",
    responses={
        400: {"model": ErrorResponse, "description": "Database error"},
    },
)
async def list_movies(
    movie_service: MovieService = Depends(get_movie_service),
):
    try:
        return await movie_service.list_movies()
    except PyMongoError as e:
        logger.error(f"Error listing movies: {e}", exc_info=True)
        raise StorageError(
            "An error occurred while retrieving movies.",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
