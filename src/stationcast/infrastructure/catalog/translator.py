"""Translate the raw catalog document into StationRecords.

Expected document shape::

    {"data": [{"id": 1,
               "name": "CKOI",
               "streams": [{"url": "..."}],
               "images": {"logo": {"ori": "..."}}}]}

A single malformed entry fails the whole catalog; entries are never
skipped.
"""

from __future__ import annotations

from typing import Any, Mapping

from stationcast.domain.entities.station import StationRecord
from stationcast.domain.exceptions import TranslationFailure


def base_path_from_url(url: str) -> str:
    """Directory part of ``url``, up to and including the last ``/``.

    Query string and fragment are ignored.
    """
    path = url.split("#", 1)[0].split("?", 1)[0]
    return path[: path.rfind("/") + 1]


def resolve_url(value: str, base_path: str) -> str:
    """Return ``value`` unchanged when absolute, else prefixed with ``base_path``."""
    if value.startswith("http"):
        return value
    if base_path.endswith("/") and value.startswith("/"):
        value = value[1:]
    return base_path + value


def _require(entry: Mapping[str, Any], key: str, position: int) -> Any:
    if key not in entry or entry[key] is None:
        raise TranslationFailure(
            f"station entry {position} is missing '{key}'", position=position
        )
    return entry[key]


def _require_mapping(value: Any, what: str, position: int) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TranslationFailure(
            f"station entry {position}: '{what}' must be an object",
            position=position,
        )
    return value


def _require_str(value: Any, what: str, position: int) -> str:
    if not isinstance(value, str):
        raise TranslationFailure(
            f"station entry {position}: '{what}' must be a string",
            position=position,
        )
    return value


def _station_id(value: Any, position: int) -> str:
    # bool is an int subclass; a JSON true is not an id.
    if isinstance(value, bool):
        raise TranslationFailure(
            f"station entry {position}: 'id' must be an integer", position=position
        )
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        try:
            return str(int(value.strip()))
        except ValueError:
            pass
    raise TranslationFailure(
        f"station entry {position}: 'id' must be an integer", position=position
    )


def station_from_entry(
    entry: Any, base_path: str, *, position: int = 0
) -> StationRecord:
    """Build one StationRecord, always picking the first stream and the logo."""
    entry = _require_mapping(entry, "entry", position)

    title = _require_str(_require(entry, "name", position), "name", position)

    images = _require_mapping(_require(entry, "images", position), "images", position)
    logo = _require_mapping(_require(images, "logo", position), "images.logo", position)
    artwork = _require_str(
        _require(logo, "ori", position), "images.logo.ori", position
    )

    streams = _require(entry, "streams", position)
    if not isinstance(streams, list):
        raise TranslationFailure(
            f"station entry {position}: 'streams' must be a list", position=position
        )
    if not streams:
        raise TranslationFailure(
            f"station entry {position} has an empty stream list", position=position
        )
    stream = _require_mapping(streams[0], "streams[0]", position)
    source = _require_str(_require(stream, "url", position), "streams[0].url", position)

    return StationRecord(
        station_id=_station_id(_require(entry, "id", position), position),
        title=title,
        stream_url=resolve_url(source, base_path),
        artwork_url=resolve_url(artwork, base_path),
    )


def translate_catalog(
    document: Mapping[str, Any], base_path: str
) -> list[StationRecord]:
    """Convert every entry of ``document["data"]`` in document order.

    Raises:
        TranslationFailure: ``data`` is missing or any entry is unusable.
    """
    entries = document.get("data")
    if not isinstance(entries, list):
        raise TranslationFailure("catalog document has no 'data' list")

    return [
        station_from_entry(entry, base_path, position=position)
        for position, entry in enumerate(entries)
    ]
