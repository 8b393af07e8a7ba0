from __future__ import annotations

import logging
from argparse import Namespace

from ...core.error_handler import ExitCode
from .checks import check_all

log = logging.getLogger(__name__)


def check(args: Namespace) -> int:
    results = check_all(args.kind, args.locales, roundtrip=not args.no_roundtrip)
    if not results:
        log.error("No tables match the given locales/kinds")
        return ExitCode.USAGE
    total = 0
    for (kind, locale), issues in results.items():
        for issue in issues:
            print(issue)
        total += len(issues)
    if total:
        log.warning("%d issue(s) in %d table(s)", total, sum(1 for i in results.values() if i))
        return ExitCode.ISSUES
    log.info("%d table(s) checked, no issues", len(results))
    return ExitCode.OK
