"""Main entry point - runs the snap API server."""

import logging

import uvicorn

from snapbridge.api.app import create_app
from snapbridge.config import get_settings

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from settings."""
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main():
    """Main entry point."""
    configure_logging()
    settings = get_settings()

    logger.info("Starting Snapbridge...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Wallet provider: {settings.wallet_provider}")

    app = create_app()
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
