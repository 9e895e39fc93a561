"""PantryChef Recipe Search Service - API entry point.

Serves the advanced recipe search API over TheMealDB:
- POST /api/recipes/advanced-search  (ingredients, cuisine, exclusions, maxTime)
- GET  /api/search?q=<name>
- GET  /api/recipe/<meal_id>
- GET  /healthz

Run with: python app.py
"""

import uvicorn

from src.api.app import create_app
from src.utils.config import config
from src.utils.logger import logger

app = create_app()


if __name__ == "__main__":
    logger.info(f"Starting PantryChef Recipe Search Service on port {config.PORT}")
    logger.info(f"Upstream recipe source: {config.MEALDB_BASE_URL}")
    logger.info(f"API docs available at: http://localhost:{config.PORT}/docs")
    uvicorn.run(app, host=config.HOST, port=config.PORT)
