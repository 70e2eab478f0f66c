import logging
import sys
from typing import Optional

from bridgequote.config import get_settings


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure the root logger to write to stdout."""

    settings = get_settings()
    if log_level is None:
        log_level = settings.log_level or ("DEBUG" if settings.debug else "INFO")
    level = getattr(logging, log_level.upper())

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("bridgequote").setLevel(level)

    # Quiet per-request logging from the HTTP client
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
