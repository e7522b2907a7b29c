"""Tests for catalog document -> StationRecord translation."""

from __future__ import annotations

from typing import Any

import pytest

from stationcast.domain.exceptions import TranslationFailure
from stationcast.infrastructure.catalog.translator import (
    base_path_from_url,
    resolve_url,
    station_from_entry,
    translate_catalog,
)

_BASE = "https://api.example.com/v1/"


# ---------------------------------------------------------------------------
# Base path + URL resolution
# ---------------------------------------------------------------------------


class TestBasePath:
    def test_strips_last_segment_and_query(self) -> None:
        url = "https://api.cogecolive.com/stations?with=streams,images"
        assert base_path_from_url(url) == "https://api.cogecolive.com/"

    def test_nested_path(self) -> None:
        assert (
            base_path_from_url("https://cdn.example.com/feeds/radio/catalog.json")
            == "https://cdn.example.com/feeds/radio/"
        )

    def test_trailing_slash_kept(self) -> None:
        assert base_path_from_url("https://x.example.com/a/") == "https://x.example.com/a/"

    def test_slash_in_query_ignored(self) -> None:
        assert (
            base_path_from_url("https://x.example.com/v2/list?next=/page/2")
            == "https://x.example.com/v2/"
        )


class TestResolveUrl:
    def test_relative_with_leading_slash(self) -> None:
        assert (
            resolve_url("/streams/a.m3u8", _BASE)
            == "https://api.example.com/v1/streams/a.m3u8"
        )

    def test_relative_without_leading_slash(self) -> None:
        assert (
            resolve_url("streams/a.m3u8", _BASE)
            == "https://api.example.com/v1/streams/a.m3u8"
        )

    def test_absolute_http_passes_through(self) -> None:
        url = "http://live.example.org/a.mp3"
        assert resolve_url(url, _BASE) == url

    def test_absolute_https_passes_through(self) -> None:
        url = "https://live.example.org/a.m3u8"
        assert resolve_url(url, _BASE) == url


# ---------------------------------------------------------------------------
# Single entry
# ---------------------------------------------------------------------------


class TestStationFromEntry:
    def test_builds_record(self, entry_factory) -> None:
        record = station_from_entry(entry_factory(12, "CKOI"), _BASE)

        assert record.station_id == "12"
        assert record.title == "CKOI"
        assert record.stream_url == "https://streams.example.com/12.m3u8"
        assert record.artwork_url == "https://img.example.com/12.png"

    def test_first_stream_wins(self, entry_factory) -> None:
        entry = entry_factory(1, "A")
        entry["streams"].insert(0, {"url": "https://first.example.com/s.aac"})
        assert station_from_entry(entry, _BASE).stream_url == (
            "https://first.example.com/s.aac"
        )

    def test_logo_original_variant_is_used(self, entry_factory) -> None:
        record = station_from_entry(entry_factory(4, "A"), _BASE)
        assert record.artwork_url.endswith("/4.png")

    def test_relative_urls_resolved(self, entry_factory) -> None:
        entry = entry_factory(2, "B", stream="/streams/b.m3u8", logo="/logos/b.png")
        record = station_from_entry(entry, _BASE)
        assert record.stream_url == "https://api.example.com/v1/streams/b.m3u8"
        assert record.artwork_url == "https://api.example.com/v1/logos/b.png"

    def test_numeric_string_id_accepted(self, entry_factory) -> None:
        entry = entry_factory(5, "C")
        entry["id"] = "05"
        assert station_from_entry(entry, _BASE).station_id == "5"

    def test_non_ascii_title_kept(self, entry_factory) -> None:
        assert station_from_entry(entry_factory(3, "Énergie"), _BASE).title == "Énergie"

    @pytest.mark.parametrize("missing", ["id", "name", "streams", "images"])
    def test_missing_top_level_field_fails(self, entry_factory, missing: str) -> None:
        entry = entry_factory(1, "A")
        del entry[missing]
        with pytest.raises(TranslationFailure, match=missing):
            station_from_entry(entry, _BASE, position=4)

    def test_failure_carries_position(self, entry_factory) -> None:
        entry = entry_factory(1, "A")
        del entry["name"]
        with pytest.raises(TranslationFailure) as exc_info:
            station_from_entry(entry, _BASE, position=4)
        assert exc_info.value.position == 4

    def test_empty_stream_list_fails(self, entry_factory) -> None:
        entry = entry_factory(1, "A")
        entry["streams"] = []
        with pytest.raises(TranslationFailure, match="empty stream list"):
            station_from_entry(entry, _BASE)

    def test_stream_without_url_fails(self, entry_factory) -> None:
        entry = entry_factory(1, "A")
        entry["streams"] = [{"bitrate": 128}]
        with pytest.raises(TranslationFailure):
            station_from_entry(entry, _BASE)

    def test_missing_logo_fails(self, entry_factory) -> None:
        entry = entry_factory(1, "A")
        entry["images"] = {"banner": {"ori": "x.png"}}
        with pytest.raises(TranslationFailure, match="logo"):
            station_from_entry(entry, _BASE)

    def test_missing_original_variant_fails(self, entry_factory) -> None:
        entry = entry_factory(1, "A")
        del entry["images"]["logo"]["ori"]
        with pytest.raises(TranslationFailure, match="ori"):
            station_from_entry(entry, _BASE)

    @pytest.mark.parametrize("bad_id", [True, 1.5, "abc", None, [1]])
    def test_non_integer_id_fails(self, entry_factory, bad_id: Any) -> None:
        entry = entry_factory(1, "A")
        entry["id"] = bad_id
        with pytest.raises(TranslationFailure):
            station_from_entry(entry, _BASE)

    def test_non_string_name_fails(self, entry_factory) -> None:
        entry = entry_factory(1, "A")
        entry["name"] = 42
        with pytest.raises(TranslationFailure, match="name"):
            station_from_entry(entry, _BASE)

    def test_entry_not_an_object_fails(self) -> None:
        with pytest.raises(TranslationFailure):
            station_from_entry(["not", "an", "object"], _BASE)


# ---------------------------------------------------------------------------
# Whole document
# ---------------------------------------------------------------------------


class TestTranslateCatalog:
    def test_three_valid_entries(self, catalog_document: dict[str, Any]) -> None:
        records = translate_catalog(catalog_document, _BASE)

        assert [r.station_id for r in records] == ["1", "2", "3"]
        assert records[1].stream_url == "https://api.example.com/v1/streams/rythme.m3u8"

    def test_empty_data_is_empty_catalog(self) -> None:
        assert translate_catalog({"data": []}, _BASE) == []

    def test_missing_data_fails(self) -> None:
        with pytest.raises(TranslationFailure, match="data"):
            translate_catalog({"stations": []}, _BASE)

    def test_data_not_a_list_fails(self) -> None:
        with pytest.raises(TranslationFailure):
            translate_catalog({"data": {"id": 1}}, _BASE)

    def test_one_bad_entry_fails_whole_catalog(
        self, catalog_document: dict[str, Any]
    ) -> None:
        """Fail-fast policy: a malformed entry is never skipped."""
        catalog_document["data"][1]["streams"] = []

        with pytest.raises(TranslationFailure) as exc_info:
            translate_catalog(catalog_document, _BASE)
        assert exc_info.value.position == 1
