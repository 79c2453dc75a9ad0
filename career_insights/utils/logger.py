"""
Logging configuration

Every record carries the acting user ("-" outside a request) and, for the
scheduled sweep, the job id. Sweep records also go to their own daily file.
"""
from loguru import logger
import os
import sys
from typing import Optional

from career_insights.config import Settings, get_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[user]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[user]} | {name}:{function} - {message}"


def _is_job_record(record) -> bool:
    return record["extra"].get("job") is not None


def setup_logger(settings: Optional[Settings] = None):
    """Configure sinks from settings; safe to call again to reconfigure."""
    settings = settings or get_settings()

    logger.remove()
    logger.configure(extra={"user": "-", "job": None})

    logger.add(sys.stdout, colorize=True, format=CONSOLE_FORMAT, level=settings.log_level)

    if not settings.log_to_file:
        return logger

    logger.add(
        os.path.join(settings.log_dir, "career_insights_{time:YYYY-MM-DD}.log"),
        format=FILE_FORMAT,
        rotation="00:00",
        retention="30 days",
        compression="zip",
        level="INFO",
    )

    # Weekly sweep audit trail
    logger.add(
        os.path.join(settings.log_dir, "insight_refresh_{time:YYYY-MM-DD}.log"),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[job]} | {message}",
        filter=_is_job_record,
        retention="12 weeks",
        level="INFO",
    )

    logger.add(
        os.path.join(settings.log_dir, "errors_{time:YYYY-MM-DD}.log"),
        format=FILE_FORMAT,
        rotation="00:00",
        retention="90 days",
        level="ERROR",
    )

    return logger


log = setup_logger()
