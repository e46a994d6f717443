# Loads movies from a JSON file into MongoDB
# data_processing/scripts/load_movies.py

import argparse
import json
import logging
import os
import sys
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError
from pymongo.collection import Collection
from pymongo.errors import ConfigurationError, ConnectionFailure, PyMongoError

from data_processing.common.db_connect import get_mongo_client, get_mongo_database
from myflix.models.movie import MovieCreate

# --- Configuration ---
logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper(),
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

MONGO_MOVIES_COLLECTION = "movies"
MOVIE_BATCH_SIZE = 500


def validate_movies(records: Sequence[Any]) -> Tuple[List[Dict[str, Any]], int]:
    """
    Validates raw records against the movie model.

    Records missing a title or description (or otherwise malformed) are
    logged and skipped.

    Returns:
        The documents ready to insert (stored field names) and the skip count.
    """
    documents: List[Dict[str, Any]] = []
    skipped = 0
    for index, record in enumerate(records):
        try:
            movie = MovieCreate.model_validate(record)
        except ValidationError as e:
            skipped += 1
            logger.warning(f"Skipping record {index}: {e.error_count()} validation error(s): {e.errors()}")
            continue
        documents.append(movie.model_dump(by_alias=True, exclude_none=True))
    return documents, skipped


def insert_movies(collection: Collection, documents: List[Dict[str, Any]],
                  batch_size: int = MOVIE_BATCH_SIZE) -> int:
    """Inserts documents in batches and returns how many were written."""
    inserted = 0
    for start in range(0, len(documents), batch_size):
        batch = documents[start:start + batch_size]
        result = collection.insert_many(batch)
        inserted += len(result.inserted_ids)
        logger.info(f"Inserted batch of {len(batch)} movies ({inserted}/{len(documents)})")
    return inserted


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load movies from a JSON array into MongoDB.")
    parser.add_argument("path", help="JSON file holding an array of movie objects.")
    parser.add_argument("--mongo-uri", default=None, help="Overrides MONGO_URI.")
    parser.add_argument("--db-name", default=None, help="Database name (default: from URI).")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Reads a JSON array of movies, validates each record and inserts the valid ones.

    Returns:
        Process exit code: 0 on success, 1 on file or database errors.
    """
    args = parse_args(argv)
    logger.info(f"Starting script: {os.path.basename(__file__)}")
    start_time = time.time()

    try:
        with open(args.path, encoding="utf-8") as fh:
            records = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        logger.critical(f"Could not read movies from {args.path}: {e}")
        return 1
    if not isinstance(records, list):
        logger.critical(f"{args.path} must contain a JSON array of movies.")
        return 1

    documents, skipped = validate_movies(records)
    logger.info(f"{len(documents)} valid movie(s), {skipped} skipped.")

    mongo_client = None
    try:
        mongo_client = get_mongo_client(args.mongo_uri)
        db = get_mongo_database(mongo_client, args.db_name)
        inserted = insert_movies(db[MONGO_MOVIES_COLLECTION], documents)
    except (ValueError, ConnectionFailure, ConfigurationError, PyMongoError) as e:
        logger.critical(f"Loading movies failed: {e}", exc_info=True)
        return 1
    finally:
        if mongo_client is not None:
            mongo_client.close()

    logger.info(f"Inserted {inserted} movie(s) in {time.time() - start_time:.2f}s.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
