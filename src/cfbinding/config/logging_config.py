import logging
import os
import sys
from typing import ClassVar, Optional

_FORMAT = "%(asctime)s | %(levelname_color)s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_configured: Optional[str] = None


class LevelColorFormatter(logging.Formatter):
    """Formatter that fills ``levelname_color``, colored only on a terminal."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\x1b[37m",
        "INFO": "\x1b[32m",
        "WARNING": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "CRITICAL": "\x1b[41m",
    }
    RESET: ClassVar[str] = "\x1b[0m"

    def __init__(self, use_color: bool):
        super().__init__(fmt=_FORMAT, datefmt=_DATEFMT)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "") if self.use_color else ""
        record.levelname_color = f"{color}{record.levelname}{self.RESET}" if color else record.levelname
        return super().format(record)


def _supports_color() -> bool:
    return sys.stdout.isatty() and os.getenv("NO_COLOR") is None


def configure_logging(level: Optional[str] = None) -> str:
    """Configure root logging once; the level defaults to ``Environment.get_log_level()``."""
    from cfbinding.config.environment import Environment

    global _configured

    level = (level or Environment.get_log_level()).upper()
    if _configured == level:
        return level
    _configured = level

    root = logging.getLogger()
    if not root.handlers:
        # pytest and embedding hosts install their own handlers first
        logging.basicConfig(level=level)
    root.setLevel(level)
    formatter = LevelColorFormatter(_supports_color())
    for handler in root.handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setLevel(level)
            handler.setFormatter(formatter)
    return level


def get_logger(name: str) -> logging.Logger:
    """Return a module-scoped logger."""
    level = configure_logging()
    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger
