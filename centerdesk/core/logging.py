import logging
from logging.handlers import RotatingFileHandler
import os
import json
import time
from datetime import datetime, timezone
from functools import wraps
from typing import Iterable, Optional
import traceback

from centerdesk.core.config import get_logging_config

# Record attributes copied into JSON file logs when a call passes them via ``extra``
CONTEXT_FIELDS = ("request_id", "collection", "record_id", "operation", "duration")


class CustomJsonFormatter(logging.Formatter):
    """One JSON object per line, for the rotating file logs"""

    def __init__(self, context_fields: Iterable[str] = CONTEXT_FIELDS):
        super().__init__()
        self.context_fields = tuple(context_fields)

    def format(self, record):
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
            "message": record.getMessage(),
        }
        payload.update(
            (name, getattr(record, name)) for name in self.context_fields if hasattr(record, name)
        )
        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb)
            }
        return json.dumps(payload, ensure_ascii=False, default=str)


def _rotating(log_dir: str, filename: str) -> RotatingFileHandler:
    return RotatingFileHandler(
        os.path.join(log_dir, filename),
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8"
    )


class LoggerFactory:
    """Factory class for creating and configuring loggers"""

    @staticmethod
    def create_logger(name: str, log_dir: Optional[str] = None, level: str = "INFO"):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers.clear()

        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(console)

        # Console only unless a log directory is configured
        if not log_dir:
            return logger

        os.makedirs(log_dir, exist_ok=True)
        app_log = _rotating(log_dir, "app.log")
        app_log.setLevel(level)

        error_log = _rotating(log_dir, "error.log")
        error_log.setLevel(logging.ERROR)

        # Timed operations only
        performance_log = _rotating(log_dir, "performance.log")
        performance_log.setLevel(level)
        performance_log.addFilter(lambda record: hasattr(record, "duration"))

        for handler in (app_log, error_log, performance_log):
            handler.setFormatter(CustomJsonFormatter())
            logger.addHandler(handler)
        return logger


def log_function_call(logger):
    """Decorator for service coroutines: logs entry, exit with duration, and failures"""
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            operation = func.__qualname__
            logger.debug(f"Entering {operation}")
            start = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception:
                logger.error(f"Error in {operation}", exc_info=True, extra={"operation": operation})
                raise
            logger.info(
                f"Exiting {operation}",
                extra={
                    "operation": operation,
                    "duration": round((time.perf_counter() - start) * 1000, 2)
                }
            )
            return result
        return wrapper
    return decorator


# Create default logger instance
_logging_config = get_logging_config()
logger = LoggerFactory.create_logger(
    "centerdesk",
    log_dir=_logging_config["log_dir"],
    level=_logging_config["log_level"]
)
