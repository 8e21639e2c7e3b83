import logging
from typing import Any, Dict, List, Optional, Tuple

from movie_api.config import DEFAULT_PAGE_SIZE
from movie_api.database import Databases
from movie_api.normalizers import format_currency, parse_json_list

logger = logging.getLogger(__name__)

SORT_ORDERS = ("asc", "desc")

# Largest value SQLite accepts as a bound integer
SQLITE_MAX_INT = 2 ** 63 - 1

DETAIL_QUERY = """
    SELECT imdbId, title, overview AS description, releaseDate, budget, runtime,
           genres, language, productionCompanies
    FROM movies
    WHERE imdbId = ?
"""

AVERAGE_RATING_QUERY = "SELECT AVG(rating) AS averageRating FROM ratings WHERE movieId = ?"


class MovieNotFoundError(LookupError):
    def __init__(self, imdb_id: str):
        super().__init__(f"Movie {imdb_id!r} not found")
        self.imdb_id = imdb_id


def build_list_query(
    page: int,
    page_size: int,
    year: Optional[int] = None,
    genre: Optional[str] = None,
    sort_order: str = "asc",
) -> Tuple[str, List[Any]]:
    """Builds the parameterized SELECT behind the movie listing.

    The genre filter is a textual containment test on the stored JSON, so
    it matches the quoted, case-sensitive name anywhere in the blob. Rows
    without a release date always come last, and imdbId breaks ties so
    that consecutive pages never overlap.
    """
    if sort_order not in SORT_ORDERS:
        raise ValueError(f"sort_order must be 'asc' or 'desc', got {sort_order!r}")

    offset = (page - 1) * page_size
    conditions = []
    params: List[Any] = []

    if year is not None:
        conditions.append("releaseDate IS NOT NULL AND strftime('%Y', releaseDate) = ?")
        params.append(str(year))

    if genre:
        conditions.append("instr(genres, ?) > 0")
        params.append(f'"{genre}"')

    query = "SELECT imdbId, title, genres, releaseDate, budget FROM movies"
    if conditions:
        query += " WHERE " + " AND ".join(conditions)
    query += f" ORDER BY releaseDate IS NULL, releaseDate {sort_order.upper()}, imdbId ASC"
    query += " LIMIT ? OFFSET ?"
    params.extend([page_size, offset])
    return query, params


class MovieService:
    def __init__(self, databases: Databases, page_size: int = DEFAULT_PAGE_SIZE):
        self.databases = databases
        self.page_size = page_size

    def list_movies(
        self,
        page: int = 1,
        year: Optional[int] = None,
        genre: Optional[str] = None,
        sort_order: str = "asc",
    ) -> List[Dict[str, Any]]:
        if (page - 1) * self.page_size > SQLITE_MAX_INT:
            return []
        query, params = build_list_query(page, self.page_size, year, genre, sort_order)
        logger.debug(f"Listing movies page={page} year={year} genre={genre!r} sort={sort_order}")
        rows = self.databases.movies.fetch_all(query, params)

        return [
            {
                "imdbId": row["imdbId"],
                "title": row["title"],
                "genres": parse_json_list(row["genres"]),
                "releaseDate": row["releaseDate"] or None,
                # A missing budget is reported as "$0", not null
                "budget": format_currency(row["budget"] or 0),
            }
            for row in rows
        ]

    def get_average_rating(self, imdb_id: str) -> Optional[float]:
        row = self.databases.ratings.fetch_one(AVERAGE_RATING_QUERY, (imdb_id,))
        if row is None or row["averageRating"] is None:
            return None
        return float(row["averageRating"])

    def get_movie_details(self, imdb_id: str) -> Dict[str, Any]:
        movie = self.databases.movies.fetch_one(DETAIL_QUERY, (imdb_id,))
        if movie is None:
            raise MovieNotFoundError(imdb_id)

        return {
            "imdbId": movie["imdbId"],
            "title": movie["title"],
            "description": movie["description"] or None,
            "releaseDate": movie["releaseDate"] or None,
            "budget": format_currency(movie["budget"] or 0),
            "runtime": movie["runtime"] or None,
            "genres": parse_json_list(movie["genres"]),
            "originalLanguage": movie["language"] or None,
            "productionCompanies": parse_json_list(movie["productionCompanies"]),
            "averageRating": self.get_average_rating(imdb_id),
        }
