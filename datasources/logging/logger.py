import sys
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Optional
from loguru import logger
from fastapi import Request
from datasources.config import settings

# Trace id of the current logical operation (request, job, script run)
_current_trace_id: ContextVar[Optional[str]] = ContextVar("current_trace_id", default=None)

class LogConfig:
    """Global logging configuration using Loguru."""
    @classmethod
    def setup_logging(cls, level: Optional[str] = None, log_to_file: Optional[bool] = None):
        level = level or settings.LOG_LEVEL
        if log_to_file is None:
            log_to_file = settings.LOG_TO_FILE

        logger.remove()

        logger.add(
            sys.stdout,
            enqueue=True,
            backtrace=True,
            diagnose=True,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<magenta>Trace:{extra[trace_id]}</magenta> - <level>{message}</level>"
            ),
            level=level,
        )

        if log_to_file:
            log_dir = Path(settings.LOG_DIR)
            log_dir.mkdir(exist_ok=True)

            logger.add(
                log_dir / "datasources_{time:YYYY-MM-DD}.log",
                rotation="00:00",
                retention="30 days",
                compression="zip",
                enqueue=True,
                format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | Trace:{extra[trace_id]} - {message}",
                level="DEBUG",
            )

            logger.add(
                log_dir / "datasources_error_{time:YYYY-MM-DD}.log",
                level="ERROR",
                rotation="100 MB",
                enqueue=True,
            )

        logger.configure(extra={"trace_id": "system"})


@contextmanager
def trace_context(trace_id: str):
    """Bind trace_id to every logger obtained inside the block."""
    token = _current_trace_id.set(trace_id)
    try:
        with logger.contextualize(trace_id=trace_id):
            yield trace_id
    finally:
        _current_trace_id.reset(token)


def get_logger(name: str = None, request: Optional[Request] = None):
    """Get logger instance; trace_id comes from the request, else from context.

    Module-level loggers are created before any trace exists; they leave
    trace_id unbound so trace_context() fills it in at log time.
    """
    extra = {"name": name} if name else {}
    if request is not None:
        extra["trace_id"] = getattr(request.state, "trace_id", "unknown")
    elif _current_trace_id.get() is not None:
        extra["trace_id"] = _current_trace_id.get()
    return logger.bind(**extra)
