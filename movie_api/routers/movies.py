import re
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from movie_api.errors import ApiError
from movie_api.schemas import ErrorResponse, MovieDetail, MovieListItem
from movie_api.services.movies import SORT_ORDERS, MovieService

router = APIRouter(prefix="/movies", tags=["movies"])

INVALID_YEAR_MESSAGE = "Invalid year format. Must be a 4-digit number."
INVALID_SORT_ORDER_MESSAGE = 'Invalid sortOrder. Must be "asc" or "desc".'

# Thirty digits already overflow any page or year, and int() refuses very long strings
LEADING_INT = re.compile(r"\s*([+-]?[0-9]{1,30})")


def get_movie_service(request: Request) -> MovieService:
    return request.app.state.movie_service


def parse_leading_int(raw: Optional[str]) -> Optional[int]:
    """Reads the integer a value starts with, so "2abc" and "2.5" both give 2."""
    match = LEADING_INT.match(raw or "")
    if match is None:
        return None
    return int(match.group(1))


def parse_page(raw: Optional[str]) -> int:
    """Anything that does not start with a positive integer falls back to the first page."""
    page = parse_leading_int(raw)
    if page is None or page < 1:
        return 1
    return page


def parse_year(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    year = parse_leading_int(raw)
    if year is None or year < 1000 or year > 9999:
        raise ApiError(400, INVALID_YEAR_MESSAGE)
    return year


def parse_sort_order(raw: Optional[str]) -> str:
    sort_order = (raw or "asc").lower()
    if sort_order not in SORT_ORDERS:
        raise ApiError(400, INVALID_SORT_ORDER_MESSAGE)
    return sort_order


@router.get("", response_model=List[MovieListItem], responses={400: {"model": ErrorResponse}})
def list_movies(
    page: Optional[str] = Query(None, description="Page number, 50 movies per page."),
    year: Optional[str] = Query(None, description="Four-digit release year."),
    genre: Optional[str] = Query(None, description="Genre name, matched case-sensitively."),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc by release date."),
    service: MovieService = Depends(get_movie_service),
):
    """Lists movies ordered by release date, optionally filtered by year and genre."""
    page_number = parse_page(page)
    year_filter = parse_year(year)
    order = parse_sort_order(sort_order)
    return service.list_movies(page=page_number, year=year_filter, genre=genre or None, sort_order=order)


@router.get("/{imdb_id}", response_model=MovieDetail, responses={404: {"model": ErrorResponse}})
def get_movie(imdb_id: str, service: MovieService = Depends(get_movie_service)):
    """Full details for one movie, including its average rating."""
    return service.get_movie_details(imdb_id)
