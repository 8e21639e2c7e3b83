import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from movie_api.config import Settings
from movie_api.database import Databases, DatabaseUnavailableError
from movie_api.errors import register_error_handlers
from movie_api.routers import movies
from movie_api.services.movies import MovieService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, databases: Optional[Databases] = None) -> FastAPI:
    """Builds the API. The database handles live for the lifetime of the app."""
    settings = settings or Settings.from_env()
    databases = databases or Databases.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            databases.open()
        except DatabaseUnavailableError as e:
            logger.critical(f"Startup Error: {e}")
            raise
        app.state.movie_service = MovieService(databases, page_size=settings.page_size)
        try:
            yield
        finally:
            databases.close()

    # --- APP CONFIGURATION ---
    app = FastAPI(title="Movie Catalog API", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # --- ROUTERS ---
    app.include_router(movies.router)

    @app.get("/", response_class=PlainTextResponse)
    def health_check():
        return "Movie API is running."

    return app
