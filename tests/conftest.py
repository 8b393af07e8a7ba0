from __future__ import annotations

import pytest
import pytest_asyncio

from nametables.core.registry import Registry
from nametables.core.tables import NameTable, SharedRef, TableKind
from nametables.infra import db
from nametables.infra.migrate import migrate


@pytest.fixture(autouse=True)
def fresh_registry():
    Registry.configure(None)
    yield
    Registry.configure(None)


@pytest.fixture
def zone_table() -> NameTable:
    eastern = ["Eastern Standard Time", "EST", "Eastern Daylight Time", "EDT", "Eastern Time", "ET"]
    return NameTable.build(
        TableKind.TIMEZONE_NAMES,
        "xx",
        [
            ("America/New_York", SharedRef("America_Eastern")),
            ("America/Toronto", SharedRef("America_Eastern")),
            ("Etc/UTC", ["Coordinated Universal Time", "", "", "", "", ""]),
            ("timezone.excity.America/Toronto", "Toronto, \"ON\""),
            ("EST5EDT", SharedRef("America_Eastern")),
        ],
        shared={"America_Eastern": eastern},
    )


@pytest.fixture
def aliased_table() -> NameTable:
    eastern = ["Eastern Standard Time", "EST", "Eastern Daylight Time", "EDT", "Eastern Time", "ET"]
    return NameTable.build(
        TableKind.TIMEZONE_NAMES,
        "xx",
        [
            ("America/New_York", SharedRef("America_Eastern")),
            ("SystemV/EST5EDT", SharedRef("SystemV_EST")),
        ],
        shared={"America_Eastern": eastern, "SystemV_EST": SharedRef("America_Eastern")},
    )


@pytest.fixture
def locale_table() -> NameTable:
    return NameTable.build(
        "localenames",
        "xx_Latn",
        [
            ("JP", "Japan"),
            ("Arab", SharedRef("metaValue_ar")),
            ("ar", SharedRef("metaValue_ar")),
            ("en_US", "English, US\nline two"),
            ("%%1901", "Traditional"),
            ("type.ca.gregorian", "Gregorian"),
        ],
        shared={"metaValue_ar": "Arabic"},
    )


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    await db.dispose_engine()
    await db.init_engine(db.sqlite_url(tmp_path / "store" / "test.db"))
    db.init_sessionmaker()
    await migrate()
    yield db.SessionLocal
    await db.dispose_engine()
