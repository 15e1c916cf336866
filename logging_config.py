"""
Logging setup for the application.

App modules log through ``logging.getLogger(__name__)``; this sets the root
level and format once and keeps the server and HTTP client libraries quiet.
"""
import logging


def configure_logging(level: str = "INFO"):
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info("Logging configured at level: %s", logging.getLevelName(log_level))
