"""
Server Entry Point - Main Layer

Runs the FastAPI application under uvicorn with the host, port and
reload options taken from the application settings.
"""

from typing import Any, Dict

import uvicorn

from src.main.config import AppSettings, get_settings
from src.shared import configure_logging, get_logger, update_logging_from_settings

# Configure logging with basic settings first
configure_logging()

# Load settings
settings = get_settings()

# Update logging with complete settings
update_logging_from_settings(settings)

# Get structured logger
logger = get_logger(__name__)

APP_IMPORT_PATH = "src.main.app:app"


def build_server_options(settings: AppSettings) -> Dict[str, Any]:
    """Translate settings into ``uvicorn.run`` keyword arguments."""
    level = getattr(settings.logging.level, "value", settings.logging.level)
    return {
        "host": settings.ge.host,
        "port": settings.ge.port,
        "reload": settings.ge.reload,
        "log_level": str(level).lower(),
        # Keep the structlog handlers installed by configure_logging
        "log_config": None,
    }


def main():
    """Main entry point for the API server."""

    options = build_server_options(get_settings())
    logger.info(
        "Starting API server",
        host=options["host"],
        port=options["port"],
        reload=options["reload"],
    )
    uvicorn.run(APP_IMPORT_PATH, **options)


if __name__ == "__main__":
    main()
