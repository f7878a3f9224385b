import logging
import sys
from pathlib import Path

from hivewatch.core.config import settings


def setup_logging() -> logging.Logger:
    """Setup application logging"""

    logger = logging.getLogger("hivewatch")
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    # Called again on reload; handlers are attached once
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.log_file:
        Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
