"""Menu Advisor - web entry point.

Serves the single-page UI and the analysis API:
- Upload a menu photo, enter dietary / budget / mood preferences
- One Gemini multimodal call per analysis, behind a 4s rate limiter
- Results rendered as recommendation cards with a star-rated value score

Run with: python app.py
"""

import uvicorn

from src.api.app import create_app
from src.utils.config import config
from src.utils.logger import logger

app = create_app()


if __name__ == "__main__":
    logger.info(f"Starting Menu Advisor on port {config.PORT}")
    logger.info(f"Access Web UI at: http://localhost:{config.PORT}")
    logger.info(f"API docs available at: http://localhost:{config.PORT}/docs")
    uvicorn.run(app, host="0.0.0.0", port=config.PORT, log_level="warning")
