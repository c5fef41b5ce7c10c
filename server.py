import logging

import uvicorn
from dotenv import load_dotenv

from rss_tags.api import create_app
from rss_tags.config import Settings

# Load environment variables (GEMINI_API_KEY etc.) from .env
load_dotenv()

settings = Settings.from_env()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("rss_tags.server")

app = create_app(settings)


if __name__ == "__main__":
    logger.info("Serving %d categories on http://%s:%d (%s, model %s)",
                len(app.state.resolver), settings.host, settings.port,
                settings.provider, settings.model_name)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
