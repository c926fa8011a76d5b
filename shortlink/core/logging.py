"""
Core logging module.

This module configures the application logging with Loguru.
"""

import logging
import os
import sys

from loguru import logger

from shortlink.core.config import Settings

REQUEST_LEVEL = "REQUEST"
LINK_ACCESS_EVENT = "link_access"


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging and redirect to loguru.

    This handler intercepts all standard library logging calls
    and redirects them to loguru's more powerful logging system.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Try to get corresponding Loguru level or use level number
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def ensure_request_level() -> None:
    """Register the custom REQUEST log level if it is not known yet."""
    try:
        logger.level(REQUEST_LEVEL)
    except ValueError:
        logger.level(REQUEST_LEVEL, no=25, color="<green>")


def _is_link_access(record) -> bool:
    return record["extra"].get("event_type") == LINK_ACCESS_EVENT


def setup_logging(settings: Settings):
    """
    Configure application logging using Loguru.

    This sets up Loguru with proper formatting, log levels, and handlers,
    and also intercepts standard library logging.
    """
    # Remove default handlers
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL.upper(),
        format=settings.LOG_FORMAT,
        backtrace=settings.DEBUG,
        diagnose=settings.DEBUG,
    )

    if settings.LOG_FILE_ENABLED:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        log_file_path = os.path.join(settings.LOG_DIR, settings.LOG_FILENAME)

        if settings.LOG_JSON:
            logger.add(
                log_file_path,
                level=settings.LOG_LEVEL.upper(),
                serialize=True,
                rotation=settings.LOG_ROTATION,
                retention=settings.LOG_RETENTION,
                compression="gz",
                filter=lambda record: not _is_link_access(record),
            )
        else:
            logger.add(
                log_file_path,
                level=settings.LOG_LEVEL.upper(),
                format=settings.LOG_FORMAT,
                rotation=settings.LOG_ROTATION,
                retention=settings.LOG_RETENTION,
                compression="gz",
                filter=lambda record: not _is_link_access(record),
            )

        # Link access events get their own file
        logger.add(
            os.path.join(settings.LOG_DIR, "link_access.log"),
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | IP:{extra[ip]} | Code:{extra[code]} | {message}",
            rotation=settings.LOG_ROTATION,
            retention=settings.LOG_RETENTION,
            enqueue=True,
            level="INFO",
            filter=_is_link_access,
        )

    ensure_request_level()

    # Intercept standard library logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in list(logging.root.manager.loggerDict.keys()):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    for log_name in ["uvicorn", "uvicorn.access", "uvicorn.error", "fastapi"]:
        logging_logger = logging.getLogger(log_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    return logger


def log_link_access(code: str, ip_address: str, user_agent: str = "") -> None:
    """
    Log a link access event.

    Args:
        code: The short code that was resolved
        ip_address: The client's IP address
        user_agent: Optional user agent string
    """
    logger.bind(
        event_type=LINK_ACCESS_EVENT,
        ip=ip_address,
        code=code,
        user_agent=user_agent,
    ).info(f"Link accessed: {code}")
