"""Run the leaderboard locally: ``python -m gurtle``."""

import sys

import uvicorn
from aws_lambda_powertools import Logger

from .database import StoreError
from .handler import service, settings

logger = Logger()


def main() -> None:
    """Check the store, then serve the API on the configured port."""
    try:
        service.db.ping()
    except StoreError as e:
        logger.error("Cannot connect to the entry store", extra={"error": str(e)})
        sys.exit(f"Should be able to connect to the entry store: {e}")

    logger.info(
        "Starting local server", extra={"host": settings.host, "port": settings.port}
    )
    uvicorn.run("gurtle.asgi:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
