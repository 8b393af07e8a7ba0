"""Logging configuration for the CLI and scripts."""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path

# Component levels; library loggers only speak up on problems
LOGGING_CONFIG = {
    "nametables": logging.INFO,
    "nametables.core": logging.INFO,
    "nametables.features": logging.INFO,
    "nametables.infra": logging.WARNING,
    "sqlalchemy": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "asyncio": logging.ERROR,
}

CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d) - %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


class ColoredFormatter(logging.Formatter):
    """Console formatter that tints the level name."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        # Other handlers share the record
        tinted = logging.makeLogRecord(record.__dict__)
        tinted.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(tinted)


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    formatter_cls = ColoredFormatter if sys.stderr.isatty() else logging.Formatter
    handler.setFormatter(formatter_cls(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    return handler


def _file_handler(log_dir: Path) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_dir / f"nametables_{datetime.now():%Y%m%d}.log",
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(log_file: bool = False, debug: bool = False, log_dir: Path = Path("logs")) -> None:
    """Configure root logging for a nametables process.

    Console output goes to stderr so that table dumps written to stdout stay
    machine-readable.
    """
    level = logging.DEBUG if debug else logging.INFO
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_console_handler(level))
    if log_file:
        root_logger.addHandler(_file_handler(log_dir))

    for logger_name, component_level in LOGGING_CONFIG.items():
        own = logger_name.startswith("nametables")
        logging.getLogger(logger_name).setLevel(logging.DEBUG if debug and own else component_level)

    logging.getLogger(__name__).debug(
        "Logging configured (console=%s, file=%s)",
        logging.getLevelName(level),
        "ENABLED" if log_file else "DISABLED",
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
