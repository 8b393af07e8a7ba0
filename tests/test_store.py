from __future__ import annotations

import pytest

from nametables.core.errors import UnknownLocaleError
from nametables.core.registry import get_table
from nametables.core.tables import NameTable, TableKind, ZoneNames
from nametables.infra.repos import TablesRepo

pytestmark = [pytest.mark.store, pytest.mark.asyncio]


async def _save(session_factory, *tables):
    async with session_factory() as s:
        repo = TablesRepo(s)
        for table in tables:
            await repo.save(table)
        await s.commit()


async def test_save_and_load(session_factory, zone_table, locale_table):
    await _save(session_factory, zone_table, locale_table)

    async with session_factory() as s:
        repo = TablesRepo(s)
        zones = await repo.load("timezonenames", "xx")
        names = await repo.load(TableKind.LOCALE_NAMES, "xx_Latn")

    assert zones == zone_table
    assert names == locale_table
    assert list(zones) == list(zone_table)
    assert zones["America/New_York"] is zones["EST5EDT"]
    assert zones.ref_of("America/Toronto") == "America_Eastern"
    assert zones.ref_of("Etc/UTC") is None
    assert names["Arab"] is names["ar"]


async def test_packaged_table_survives_store(session_factory):
    table = get_table("fr_CA", "tz")
    await _save(session_factory, table)
    async with session_factory() as s:
        back = await TablesRepo(s).load("tz", "fr_CA")
    assert back == table
    assert back.exemplar_city("Pacific/Easter") == "île de Pâques"


async def test_lookup(session_factory, zone_table, locale_table):
    await _save(session_factory, zone_table, locale_table)
    async with session_factory() as s:
        repo = TablesRepo(s)
        eastern = await repo.lookup("tz", "xx", "America/Toronto")
        city = await repo.lookup("tz", "xx", "timezone.excity.America/Toronto")
        arabic = await repo.lookup("locale", "xx_Latn", "ar")
        missing = await repo.lookup("locale", "xx_Latn", "ZZ")

    assert isinstance(eastern, ZoneNames)
    assert eastern.short_daylight == "EDT"
    assert city == 'Toronto, "ON"'
    assert arabic == "Arabic"
    assert missing is None


async def test_list_tables(session_factory, zone_table, locale_table):
    await _save(session_factory, zone_table, locale_table)
    async with session_factory() as s:
        listed = await TablesRepo(s).list_tables()
    assert listed == [
        (TableKind.LOCALE_NAMES, "xx_Latn", 6),
        (TableKind.TIMEZONE_NAMES, "xx", 5),
    ]


async def test_save_replaces_existing(session_factory, locale_table):
    await _save(session_factory, locale_table)
    smaller = NameTable.build("localenames", "xx_Latn", [("JP", "Nippon")])
    await _save(session_factory, smaller)

    async with session_factory() as s:
        repo = TablesRepo(s)
        back = await repo.load("localenames", "xx_Latn")
        listed = await repo.list_tables()

    assert back == smaller
    assert listed == [(TableKind.LOCALE_NAMES, "xx_Latn", 1)]


async def test_delete(session_factory, zone_table):
    await _save(session_factory, zone_table)
    async with session_factory() as s:
        repo = TablesRepo(s)
        assert await repo.delete("tz", "xx") is True
        assert await repo.delete("tz", "xx") is False
        await s.commit()

    async with session_factory() as s:
        assert await TablesRepo(s).list_tables() == []
        with pytest.raises(UnknownLocaleError):
            await TablesRepo(s).load("tz", "xx")


async def test_load_unknown_table(session_factory):
    async with session_factory() as s:
        with pytest.raises(UnknownLocaleError):
            await TablesRepo(s).load("currency", "xx")


async def test_aliases_survive_store(session_factory, aliased_table):
    await _save(session_factory, aliased_table)
    async with session_factory() as s:
        back = await TablesRepo(s).load("tz", "xx")
    assert back == aliased_table
    assert back.alias_of("SystemV_EST") == "America_Eastern"
    assert back["SystemV/EST5EDT"] is back["America/New_York"]
