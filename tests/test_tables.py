from __future__ import annotations

import pytest

from nametables.core.errors import ArityError, DuplicateKeyError, TableFormatError, UnresolvedReferenceError
from nametables.core.tables import EXCITY_PREFIX, NameTable, SharedRef, TableKind, ZoneNames


class TestTableKind:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("localenames", TableKind.LOCALE_NAMES),
            ("LocaleNames", TableKind.LOCALE_NAMES),
            ("timezone", TableKind.TIMEZONE_NAMES),
            ("tz", TableKind.TIMEZONE_NAMES),
            ("time-zone-names", TableKind.TIMEZONE_NAMES),
            ("currencies", TableKind.CURRENCY_NAMES),
            (TableKind.CURRENCY_NAMES, TableKind.CURRENCY_NAMES),
        ],
    )
    def test_parse(self, raw, expected):
        assert TableKind.parse(raw) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            TableKind.parse("formatdata")


class TestBuild:
    def test_keeps_source_order(self, locale_table):
        assert list(locale_table) == ["JP", "Arab", "ar", "en_US", "%%1901", "type.ca.gregorian"]
        assert len(locale_table) == 6

    def test_mapping_access(self, locale_table):
        assert locale_table["JP"] == "Japan"
        assert locale_table.get("FR") is None
        assert "ar" in locale_table
        assert "FR" not in locale_table
        with pytest.raises(KeyError):
            locale_table["FR"]

    def test_shared_values_are_one_object(self, locale_table, zone_table):
        assert locale_table["Arab"] is locale_table["ar"]
        assert locale_table.ref_of("ar") == "metaValue_ar"
        assert locale_table.ref_of("JP") is None
        assert zone_table["America/New_York"] is zone_table.shared["America_Eastern"]
        assert zone_table["EST5EDT"] is zone_table["America/Toronto"]

    def test_zone_names_slots(self, zone_table):
        names = zone_table.zone_names("America/New_York")
        assert isinstance(names, ZoneNames)
        assert names.long_standard == "Eastern Standard Time"
        assert names.short_standard == "EST"
        assert names.long_daylight == "Eastern Daylight Time"
        assert names.short_daylight == "EDT"
        assert names.long_generic == "Eastern Time"
        assert names.short_generic == "ET"
        assert names == ("Eastern Standard Time", "EST", "Eastern Daylight Time", "EDT", "Eastern Time", "ET")

    def test_empty_slots_are_kept(self, zone_table):
        utc = zone_table.zone_names("Etc/UTC")
        assert utc == ("Coordinated Universal Time", "", "", "", "", "")
        assert len(utc) == 6

    def test_exemplar_city(self, zone_table):
        assert zone_table.exemplar_city("America/Toronto") == 'Toronto, "ON"'
        assert zone_table.exemplar_city("Europe/Paris") is None
        assert list(zone_table.zones()) == ["America/New_York", "America/Toronto", "Etc/UTC", "EST5EDT"]

    def test_zone_names_on_excity_key(self, zone_table):
        with pytest.raises(KeyError):
            zone_table.zone_names(EXCITY_PREFIX + "America/Toronto")

    def test_zone_names_on_locale_table(self, locale_table):
        with pytest.raises(TypeError):
            locale_table.zone_names("JP")

    def test_values_are_read_only(self, locale_table):
        with pytest.raises(TypeError):
            locale_table["JP"] = "Nippon"  # type: ignore[index]
        with pytest.raises(TypeError):
            locale_table.shared["metaValue_ar"] = "x"  # type: ignore[index]


class TestValidation:
    def test_duplicate_key(self):
        with pytest.raises(DuplicateKeyError) as exc:
            NameTable.build("localenames", "xx", [("JP", "Japan"), ("JP", "Nippon")])
        assert exc.value.key == "JP"
        assert exc.value.locale == "xx"

    @pytest.mark.parametrize("size", [0, 4, 5, 7])
    def test_zone_arity(self, size):
        with pytest.raises(ArityError) as exc:
            NameTable.build("timezonenames", "xx", [("Europe/Paris", ["x"] * size)])
        assert exc.value.size == size
        assert exc.value.expected == 6

    def test_shared_zone_arity(self):
        with pytest.raises(ArityError):
            NameTable.build(
                "timezonenames", "xx", [("Europe/Paris", SharedRef("CET"))], shared={"CET": ["a", "b", "c", "d"]}
            )

    def test_zone_key_needs_zone_names(self):
        with pytest.raises(TableFormatError):
            NameTable.build("timezonenames", "xx", [("Europe/Paris", "Paris")])

    def test_excity_key_needs_string(self):
        with pytest.raises(TableFormatError):
            NameTable.build("timezonenames", "xx", [(EXCITY_PREFIX + "Europe/Paris", [""] * 6)])

    def test_locale_table_rejects_arrays(self):
        with pytest.raises(TableFormatError):
            NameTable.build("localenames", "xx", [("JP", [""] * 6)])

    def test_non_string_slot(self):
        with pytest.raises(TableFormatError):
            NameTable.build("timezonenames", "xx", [("Europe/Paris", ["a", "b", None, "d", "e", "f"])])

    def test_unresolved_reference(self):
        with pytest.raises(UnresolvedReferenceError) as exc:
            NameTable.build("timezonenames", "xx", [("Europe/Paris", SharedRef("Europe_Central"))])
        assert exc.value.name == "Europe_Central"


class TestEquality:
    def test_equal_by_value(self, zone_table):
        rebuilt = NameTable.build(zone_table.kind, zone_table.locale, list(zone_table.items()))
        # same pairs, but the rebuilt table no longer records shared names
        assert list(rebuilt.items()) == list(zone_table.items())
        assert rebuilt != zone_table

    def test_order_matters(self, locale_table):
        reordered = NameTable.build(
            locale_table.kind,
            locale_table.locale,
            [(k, SharedRef(locale_table.ref_of(k)) if locale_table.ref_of(k) else v) for k, v in reversed(list(locale_table.items()))],
            shared=locale_table.shared,
        )
        assert dict(reordered.items()) == dict(locale_table.items())
        assert reordered != locale_table


class TestAliases:
    EASTERN = ["Eastern Standard Time", "EST", "Eastern Daylight Time", "EDT", "Eastern Time", "ET"]

    def test_alias_is_one_object(self):
        table = NameTable.build(
            "timezonenames",
            "xx",
            [("America/New_York", SharedRef("America_Eastern")), ("EST5EDT", SharedRef("SystemV_EST"))],
            shared={"America_Eastern": self.EASTERN, "SystemV_EST": SharedRef("America_Eastern")},
        )
        assert table["EST5EDT"] is table["America/New_York"]
        assert table.shared["SystemV_EST"] is table.shared["America_Eastern"]
        assert table.alias_of("SystemV_EST") == "America_Eastern"
        assert table.alias_of("America_Eastern") is None
        assert table.ref_of("EST5EDT") == "SystemV_EST"

    def test_alias_chain_in_any_order(self):
        table = NameTable.build(
            "timezonenames",
            "xx",
            [("EST5EDT", SharedRef("C"))],
            shared={"C": SharedRef("B"), "B": SharedRef("A"), "A": self.EASTERN},
        )
        assert list(table.shared) == ["C", "B", "A"]
        assert table["EST5EDT"] is table.shared["A"]

    def test_same_sequence_object_becomes_alias(self):
        eastern = list(self.EASTERN)
        table = NameTable.build(
            "timezonenames", "xx", [("EST5EDT", SharedRef("B"))], shared={"A": eastern, "B": eastern}
        )
        assert table.alias_of("B") == "A"
        assert table.shared["A"] is table.shared["B"]

    def test_alias_cycle(self):
        with pytest.raises(TableFormatError):
            NameTable.build("timezonenames", "xx", [], shared={"A": SharedRef("B"), "B": SharedRef("A")})

    def test_dangling_alias(self):
        with pytest.raises(UnresolvedReferenceError) as exc:
            NameTable.build("timezonenames", "xx", [], shared={"A": SharedRef("Missing")})
        assert exc.value.name == "Missing"

    @pytest.mark.parametrize("name", ["", 5, ["America_Eastern"]])
    def test_reference_name_must_be_a_string(self, name):
        with pytest.raises(TableFormatError):
            NameTable.build(
                "timezonenames", "xx", [("EST5EDT", SharedRef(name))], shared={"America_Eastern": self.EASTERN}
            )

    def test_aliases_take_part_in_equality(self):
        pairs = [("EST5EDT", SharedRef("SystemV_EST"))]
        aliased = NameTable.build(
            "timezonenames", "xx", pairs, shared={"A": self.EASTERN, "SystemV_EST": SharedRef("A")}
        )
        separate = NameTable.build(
            "timezonenames", "xx", pairs, shared={"A": self.EASTERN, "SystemV_EST": list(self.EASTERN)}
        )
        assert list(aliased.items()) == list(separate.items())
        assert aliased != separate
