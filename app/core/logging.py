"""Structured logging for the Sales Enablement Engine.

Every module gets its logger through ``get_logger(__name__)``. Records are
rendered as ``key=value`` pairs so store failures and CRM sync outcomes can
be grepped by ``deal_id`` / ``asset_id``.
"""

import logging
import sys
from typing import Any

# Entity identifiers promoted to top-level keys when passed via ``extra``
CONTEXT_KEYS = ("request_id", "deal_id", "asset_id", "user_id")


class StructuredFormatter(logging.Formatter):
    """Render a record as space separated key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "message": record.getMessage(),
        }

        for key in CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                log_data[key] = value

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        line = " ".join(f"{k}={v}" for k, v in log_data.items())
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _level_for_env() -> int:
    try:
        from app.core.config import get_settings

        env = get_settings().APP_ENV
    except Exception:
        # Settings unavailable (missing env vars) - fall back to INFO
        return logging.INFO
    return logging.DEBUG if env == "dev" else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger writing structured lines to stdout
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(_level_for_env())
        logger.propagate = False

    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **kwargs: Any) -> None:
    """
    Log with additional context fields.

    Known entity keys (deal_id, asset_id, ...) become top-level fields, the
    rest is appended as free-form extra data.
    """
    extra: dict[str, Any] = {key: kwargs.pop(key) for key in CONTEXT_KEYS if key in kwargs}
    extra["extra_data"] = kwargs
    logger.log(level, msg, extra=extra)
