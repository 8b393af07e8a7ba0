#!/usr/bin/env python3
"""Regenerate nametables/locales from a tree of generated Java name bundles.

    python scripts/build_data.py path/to/src [more/src ...]
"""
from __future__ import annotations

import sys
from pathlib import Path

from nametables.core.logging_config import setup_logging
from nametables.features.javasrc import import_sources
from nametables.features.javasrc.parser import discover_sources

LOCALES_DIR = Path(__file__).resolve().parent.parent / "nametables" / "locales"


def main(roots: list[str]) -> int:
    if not roots:
        print(__doc__.strip(), file=sys.stderr)
        return 2
    paths = [p for root in roots for p in discover_sources(Path(root))]
    import_sources(paths, LOCALES_DIR)
    return 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(main(sys.argv[1:]))
