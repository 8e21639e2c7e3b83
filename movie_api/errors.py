import logging
import sqlite3

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from movie_api.database import DatabaseUnavailableError
from movie_api.services.movies import MovieNotFoundError

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Movie not found"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class ApiError(Exception):
    """A client-facing failure rendered as ``{"error": message}``."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def api_error_handler(request: Request, exc: ApiError):
    return error_response(exc.status_code, exc.message)


async def not_found_handler(request: Request, exc: MovieNotFoundError):
    logger.info(f"Movie not found: {exc.imdb_id!r}")
    return error_response(404, NOT_FOUND_MESSAGE)


async def storage_error_handler(request: Request, exc: Exception):
    logger.error(f"DB Error on {request.url.path}: {exc}", exc_info=exc)
    return error_response(500, INTERNAL_ERROR_MESSAGE)


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return error_response(500, INTERNAL_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(MovieNotFoundError, not_found_handler)
    app.add_exception_handler(sqlite3.Error, storage_error_handler)
    app.add_exception_handler(DatabaseUnavailableError, storage_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
