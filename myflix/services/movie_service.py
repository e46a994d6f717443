# myflix/services/movie_service.py

import logging
from typing import List

from myflix.data_access.mongo_client import MovieRepository
from myflix.models.movie import MovieRead

logger = logging.getLogger(__name__)


class MovieService:
    def __init__(self, repository: MovieRepository):
        """
        Initializes the Movie Service.

        Args:
            repository: Movie repository bound to the application's database.
        """
        self.repository = repository

    async def list_movies(self) -> List[MovieRead]:
        """
        Retrieves every movie.

        Returns:
            All movies in storage order; an empty list when the collection is empty.

        Raises:
            PyMongoError: If a database error occurs.
        """
        docs = await self.repository.find_all()
        movies = [MovieRead.model_validate(doc) for doc in docs]
        logger.info(f"Fetched {len(movies)} movies")
        return movies
