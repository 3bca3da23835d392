"""
Main entrypoint: serves the overview API with uvicorn.

Usage:
    python -m activity_overview
    uvicorn activity_overview.api.main:app --host 0.0.0.0 --port 8000
"""
import logging

import uvicorn

from activity_overview.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    logger = logging.getLogger(__name__)
    logger.info("Serving overview API on %s:%d", settings.api_host, settings.api_port)
    uvicorn.run(
        "activity_overview.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
