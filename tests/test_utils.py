"""
Tests for slug, specs and date helpers.
"""

from datetime import date, datetime

import pytest

from storefront.fastapi.core.utils import coerce_datetime, epoch_millis, normalize_slug, parse_specs

NOW = datetime(2026, 3, 2, 9, 30, 0)


class TestNormalizeSlug:
    @pytest.mark.parametrize("raw, expected", [
        ("Incense A", "incense-a"),
        ("  Rosé Oud!! ", "rose-oud"),
        ("--already-ok--", "already-ok"),
        ("Año Nuevo 2026", "ano-nuevo-2026"),
        ("", ""),
        (None, ""),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_slug(raw) == expected


class TestParseSpecs:
    def test_dict_passes_through(self):
        assert parse_specs({"burn": "45 min"}) == {"burn": "45 min"}

    def test_json_object(self):
        assert parse_specs('{"burn": "45 min", "sticks": 20}') == {"burn": "45 min", "sticks": 20}

    def test_key_value_lines(self):
        text = "Burn time: 45 min\nSticks: 20\nno separator here"
        assert parse_specs(text) == {"Burn time": "45 min", "Sticks": "20"}

    def test_values_may_contain_colons(self):
        assert parse_specs("Ratio: 1:2") == {"Ratio": "1:2"}

    @pytest.mark.parametrize("raw", [None, "", "   ", {}, "just words"])
    def test_nothing_usable(self, raw):
        assert parse_specs(raw) is None


class TestCoerceDatetime:
    def test_iso_with_zulu_suffix(self):
        assert coerce_datetime("2025-01-15T10:00:00Z") == datetime(2025, 1, 15, 10, 0, 0)

    def test_iso_with_offset_is_converted_to_utc(self):
        assert coerce_datetime("2025-01-15T10:00:00+02:00") == datetime(2025, 1, 15, 8, 0, 0)

    def test_naive_iso(self):
        assert coerce_datetime("2025-01-15T10:00:00.250000") == datetime(2025, 1, 15, 10, 0, 0, 250000)

    def test_epoch_milliseconds(self):
        assert coerce_datetime(epoch_millis(NOW)) == NOW

    def test_date_object(self):
        assert coerce_datetime(date(2025, 1, 15)) == datetime(2025, 1, 15)

    def test_booleans_are_not_timestamps(self):
        assert coerce_datetime(True) is None

    @pytest.mark.parametrize("raw", [None, "", "not-a-date", "2025-13-45"])
    def test_unparseable_without_fallback(self, raw):
        assert coerce_datetime(raw) is None

    @pytest.mark.parametrize("raw", [None, "", "not-a-date"])
    def test_unparseable_with_fallback(self, raw):
        assert coerce_datetime(raw, fallback_now=True, now=NOW) == NOW


def test_epoch_millis():
    assert epoch_millis(datetime(1970, 1, 1, 0, 0, 1)) == 1000
