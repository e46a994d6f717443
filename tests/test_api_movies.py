from bson import ObjectId
from pymongo.errors import AutoReconnect

from myflix.api.deps import get_movie_repository

SAMPLE_MOVIES = [
    {
        "title": "Silence of the Lambs",
        "description": "A young FBI cadet seeks help from an imprisoned cannibal.",
        "genre": {"Name": "Thriller", "Description": "Suspense and tension."},
        "director": {"Name": "Jonathan Demme", "Bio": "American filmmaker."},
        "actors": ["Jodie Foster", "Anthony Hopkins"],
        "ImagePath": "https://example.org/silence.png",
        "Featured": True,
    },
    {
        "title": "Minimal",
        "description": "Only the required fields.",
    },
]


async def test_list_movies_empty_collection(client):
    response = await client.get("/movies")

    assert response.status_code == 200
    assert response.json() == []


async def test_list_movies_returns_stored_documents(client, mongo_db):
    await mongo_db.movies.insert_many([dict(m) for m in SAMPLE_MOVIES])

    response = await client.get("/movies")

    assert response.status_code == 200
    movies = {m["title"]: m for m in response.json()}
    assert set(movies) == {"Silence of the Lambs", "Minimal"}

    full = movies["Silence of the Lambs"]
    assert ObjectId.is_valid(full["_id"])
    assert full["genre"] == {"Name": "Thriller", "Description": "Suspense and tension."}
    assert full["director"] == {"Name": "Jonathan Demme", "Bio": "American filmmaker."}
    assert full["actors"] == ["Jodie Foster", "Anthony Hopkins"]
    assert full["ImagePath"] == "https://example.org/silence.png"
    assert full["Featured"] is True

    minimal = movies["Minimal"]
    assert minimal["actors"] == []
    assert minimal["Featured"] is False
    assert minimal["genre"] is None


async def test_list_movies_tolerates_loosely_shaped_documents(client, mongo_db):
    await mongo_db.movies.insert_many([
        {"title": "Good", "description": "ok"},
        {"title": "Legacy", "Featured": None, "actors": None},
    ])

    response = await client.get("/movies")

    assert response.status_code == 200
    movies = {m["title"]: m for m in response.json()}
    assert set(movies) == {"Good", "Legacy"}
    legacy = movies["Legacy"]
    assert legacy["description"] is None
    assert legacy["actors"] == []
    assert legacy["Featured"] is False


async def test_list_movies_database_failure(app, client):
    class FailingMovieRepository:
        async def find_all(self):
            raise AutoReconnect("connection reset")

    app.dependency_overrides[get_movie_repository] = lambda: FailingMovieRepository()
    try:
        response = await client.get("/movies")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 400
    body = response.json()
    assert body["kind"] == "storage_error"
    assert set(body) == {"kind", "message", "detail"}


async def test_list_movies_without_database(app, client):
    app.state.db = None

    response = await client.get("/movies")

    assert response.status_code == 503
    assert response.json()["kind"] == "service_unavailable"
