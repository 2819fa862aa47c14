import sys
from typing import TYPE_CHECKING, Optional
from loguru import logger
import os

if TYPE_CHECKING:
    from .config import ConfigManager

def setup_logging(debug_mode: bool = True, log_dir: Optional[str] = None):
    """
    Configures Loguru logger.

    Console output always; a rotating file sink only when log_dir is given.
    """
    # Remove default handler
    logger.remove()

    # Console Handler
    level = "DEBUG" if debug_mode else "INFO"
    logger.add(sys.stderr, level=level, format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>")

    # File Handler
    if log_dir:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)
        logger.add(os.path.join(log_dir, "docklayout_{time}.log"), rotation="10 MB", retention="1 week", level="DEBUG")

    logger.info("Logging initialized.")

def setup_logging_from(config: "ConfigManager"):
    """Configure logging from the [logging] section of a ConfigManager."""
    settings = config.data.logging
    setup_logging(settings.debug_mode, settings.log_dir)
