import logging

import uvicorn

from movie_api.config import Settings
from movie_api.main import create_app

# --- LOGGING CONFIGURATION ---
settings = Settings.from_env()
logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = create_app(settings)

if __name__ == "__main__":
    logger.info(f"Server is running at http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
