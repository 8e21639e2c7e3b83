import json
import sqlite3

import pytest
from fastapi.testclient import TestClient

from movie_api.config import Settings
from movie_api.main import create_app

SHAWSHANK = {
    "imdbId": "tt0111161",
    "title": "The Shawshank Redemption",
    "overview": "Two imprisoned men bond over a number of years.",
    "releaseDate": "1994-09-23",
    "budget": 25000000,
    "runtime": 142,
    "genres": json.dumps([{"id": 18, "name": "Drama"}, {"id": 80, "name": "Crime"}]),
    "language": "en",
    "productionCompanies": json.dumps([{"id": 97, "name": "Castle Rock Entertainment"}]),
}

BARE_MOVIE = {
    "imdbId": "tt0000042",
    "title": "Untitled Project",
    "overview": "",
    "releaseDate": None,
    "budget": None,
    "runtime": None,
    "genres": "{not json",
    "language": None,
    "productionCompanies": None,
}

DRAMA = [{"id": 18, "name": "Drama"}]
COMEDY = [{"id": 35, "name": "Comedy"}]
ROMANTIC_COMEDY = [{"id": 10749, "name": "Romantic Comedy"}]


def catalog_rows():
    """Two hundred generated movies plus two hand-written ones.

    The first seventy are all released in 1994 so year-filtered listings
    span more than one page.
    """
    rows = []
    for i in range(1, 201):
        if i <= 70:
            release = f"1994-{i % 12 + 1:02d}-{i % 28 + 1:02d}"
        elif i % 25 == 0:
            release = None
        else:
            release = f"{1990 + i % 10}-{i % 12 + 1:02d}-{i % 28 + 1:02d}"
        if i % 7 == 0:
            genres = ROMANTIC_COMEDY
        elif i % 3 == 0:
            genres = COMEDY
        else:
            genres = DRAMA
        rows.append({
            "imdbId": f"tt9{i:06d}",
            "title": f"Movie {i}",
            "overview": f"Overview {i}",
            "releaseDate": release,
            "budget": None if i % 11 == 0 else i * 123457,
            "runtime": 90 + i % 60,
            "genres": json.dumps(genres),
            "language": "en",
            "productionCompanies": "[]",
        })
    rows.append(SHAWSHANK)
    rows.append(BARE_MOVIE)
    return rows


def build_movies_db(path):
    conn = sqlite3.connect(str(path))
    conn.execute(
        "CREATE TABLE movies (imdbId TEXT PRIMARY KEY, title TEXT, overview TEXT, releaseDate TEXT,"
        " budget INTEGER, runtime INTEGER, genres TEXT, language TEXT, productionCompanies TEXT)"
    )
    conn.executemany(
        "INSERT INTO movies VALUES (:imdbId, :title, :overview, :releaseDate, :budget, :runtime,"
        " :genres, :language, :productionCompanies)",
        catalog_rows(),
    )
    conn.commit()
    conn.close()


def build_ratings_db(path):
    conn = sqlite3.connect(str(path))
    conn.execute("CREATE TABLE ratings (userId INTEGER, movieId TEXT, rating REAL)")
    conn.executemany(
        "INSERT INTO ratings VALUES (?, ?, ?)",
        [(1, "tt0111161", 5.0), (2, "tt0111161", 4.0), (3, "tt0111161", 4.5), (1, "tt9000001", 3.0)],
    )
    conn.commit()
    conn.close()


@pytest.fixture
def settings(tmp_path):
    movies_path = tmp_path / "movies.db"
    ratings_path = tmp_path / "ratings.db"
    build_movies_db(movies_path)
    build_ratings_db(ratings_path)
    return Settings(movies_db_path=str(movies_path), ratings_db_path=str(ratings_path))


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
