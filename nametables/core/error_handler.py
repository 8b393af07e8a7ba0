"""Error handling for command-line entry points."""

from __future__ import annotations

import logging
from enum import IntEnum

from sqlalchemy.exc import SQLAlchemyError

from .errors import NameTablesError, TableFormatError, UnknownLocaleError

log = logging.getLogger(__name__)


class ExitCode(IntEnum):
    OK = 0
    ISSUES = 1
    USAGE = 2
    DATA_ERROR = 3
    STORE_ERROR = 4
    INTERNAL = 70


class ErrorHandler:
    """Centralized mapping from exceptions to logs and exit codes."""

    @staticmethod
    def handle_error(error: BaseException) -> ExitCode:
        if isinstance(error, UnknownLocaleError):
            log.error("%s", error)
            return ExitCode.USAGE
        if isinstance(error, KeyError):
            log.error("No such key: %s", error.args[0] if error.args else error)
            return ExitCode.USAGE
        if isinstance(error, TableFormatError):
            log.error("Malformed table data: %s", error)
            return ExitCode.DATA_ERROR
        if isinstance(error, NameTablesError):
            log.error("%s", error)
            return ExitCode.DATA_ERROR
        if isinstance(error, SQLAlchemyError):
            log.error("Database error: %s", error)
            return ExitCode.STORE_ERROR
        if isinstance(error, OSError):
            log.error("I/O error: %s", error)
            return ExitCode.USAGE
        log.error("Unhandled error", exc_info=error)
        return ExitCode.INTERNAL
