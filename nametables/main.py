from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .core.config import settings
from .core.error_handler import ErrorHandler, ExitCode
from .core.logging_config import setup_logging, get_logger
from .core.registry import Registry
from .features.browse import register as register_browse
from .features.export import register as register_export
from .features.integrity import register as register_integrity
from .features.javasrc import register as register_javasrc

log = get_logger(__name__)


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nametables",
        description="Look up, check and convert CLDR locale, time-zone and currency name tables.",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--data-dir", type=Path, default=None, help="Read tables from this directory")
    sub = parser.add_subparsers(dest="command", metavar="command")
    sub.required = True

    register_browse(sub)
    register_export(sub)
    register_javasrc(sub)
    register_integrity(sub)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = make_parser()
    args = parser.parse_args(argv)

    setup_logging(log_file=settings.LOG_FILE, debug=args.debug or settings.DEBUG)
    if args.data_dir is not None:
        Registry.configure(args.data_dir)

    try:
        return int(args.handler(args))
    except KeyboardInterrupt:
        log.warning("Interrupted")
        return ExitCode.INTERNAL
    except Exception as e:
        return int(ErrorHandler.handle_error(e))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
