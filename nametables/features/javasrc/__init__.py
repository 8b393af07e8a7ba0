from __future__ import annotations

import argparse

from .handlers import import_java, import_sources
from .parser import decode_java_string, parse_bundle_file, parse_bundle_source


def register(sub: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    p = sub.add_parser("import-java", help="Convert generated Java name bundles to JSON tables")
    p.add_argument("sources", nargs="+", help="Java source files or directories to scan")
    p.add_argument("--out", required=True, help="Directory for the JSON tables")
    p.set_defaults(handler=import_java)


__all__ = ["register", "import_sources", "decode_java_string", "parse_bundle_file", "parse_bundle_source"]
