import os
from pydantic import BaseModel

# --- PATHS ---
# Assumes this config.py is inside movie_api/, so we go up one level to root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
MOVIES_DB_PATH = os.path.join(BASE_DIR, "movies.db")
RATINGS_DB_PATH = os.path.join(BASE_DIR, "ratings.db")

DEFAULT_PORT = 3000
DEFAULT_PAGE_SIZE = 50


class ConfigError(ValueError):
    pass


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


class Settings(BaseModel):
    movies_db_path: str = MOVIES_DB_PATH
    ratings_db_path: str = RATINGS_DB_PATH
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_env(cls) -> "Settings":
        """Reads every setting from the process environment, falling back to defaults."""
        page_size = _int_env("PAGE_SIZE", DEFAULT_PAGE_SIZE)
        if page_size < 1:
            raise ConfigError("PAGE_SIZE must be at least 1")
        return cls(
            movies_db_path=os.getenv("MOVIES_DB_PATH") or MOVIES_DB_PATH,
            ratings_db_path=os.getenv("RATINGS_DB_PATH") or RATINGS_DB_PATH,
            host=os.getenv("HOST") or "0.0.0.0",
            port=_int_env("PORT", DEFAULT_PORT),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
            page_size=page_size,
        )
