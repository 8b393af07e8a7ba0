from __future__ import annotations

from . import csv_codec, json_codec

FILE_SUFFIXES = {
    "json": ".json",
    "csv": ".csv",
    "sqlite": ".db",
}

__all__ = ["csv_codec", "json_codec", "FILE_SUFFIXES"]
