"""
Main entry point for the plagiarism check gateway
"""

import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables first, before any other imports
load_dotenv()
import uvicorn
from loguru import logger

from .app import create_app
from .settings import Settings


def setup_logging(level: str = "INFO"):
    """Setup logging configuration."""
    # Remove default handler
    logger.remove()

    # Add console handler
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level
    )

    # Add file handler
    log_dir = Path("logs")
    log_dir.mkdir(exist_ok=True)

    logger.add(
        log_dir / "plagiarism_gateway.log",
        rotation="1 day",
        retention="7 days",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level=level
    )


def main():
    """Main application entry point."""
    settings = Settings.from_env(dotenv=False)
    setup_logging(settings.log_level)

    logger.info("Starting plagiarism check gateway...")
    for key, value in settings.safe_dict().items():
        logger.info(f"  {key}={value}")

    if not settings.api_configured:
        logger.warning("GOWINSTON_API_TOKEN not set; checks are sent with an empty bearer token and upstream will answer with an authentication error")

    try:
        uvicorn.run(
            create_app(settings),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Shutting down plagiarism check gateway...")
    except Exception as e:
        logger.error(f"Failed to start plagiarism check gateway: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
