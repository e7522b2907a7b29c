"""Domain entities for the station catalog.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping


class InitializationState(str, Enum):
    """Lifecycle of the catalog held by the store."""

    NOT_INITIALIZED = "not_initialized"
    INITIALIZING = "initializing"
    INITIALIZED = "initialized"


@dataclass(frozen=True)
class StationRecord:
    """A single playable station built from one catalog entry."""

    station_id: str  # String form of the integer catalog id
    title: str
    stream_url: str
    artwork_url: str


def _empty_mapping() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True)
class CatalogIndex:
    """Immutable snapshot of the catalog with two views over the same records.

    ``by_id`` is the point-lookup view. ``groups`` is the browsing view
    keyed by a grouping key (currently the station id, so every group
    holds exactly one station). Both views are built together by
    :meth:`from_records` and never updated afterwards; a new catalog
    means a new index.
    """

    by_id: Mapping[str, StationRecord] = field(default_factory=_empty_mapping)
    groups: Mapping[str, tuple[StationRecord, ...]] = field(
        default_factory=_empty_mapping
    )

    @classmethod
    def empty(cls) -> CatalogIndex:
        return cls()

    @classmethod
    def from_records(cls, records: Iterable[StationRecord]) -> CatalogIndex:
        """Build both views from ``records``.

        Records sharing an id collapse to the last one seen, so each
        record in ``by_id`` lands in exactly one group.
        """
        by_id: dict[str, StationRecord] = {}
        for record in records:
            by_id[record.station_id] = record

        grouped: dict[str, list[StationRecord]] = {}
        for record in by_id.values():
            grouped.setdefault(record.station_id, []).append(record)

        return cls(
            by_id=MappingProxyType(by_id),
            groups=MappingProxyType(
                {key: tuple(members) for key, members in grouped.items()}
            ),
        )

    def get(self, station_id: str) -> StationRecord | None:
        return self.by_id.get(station_id)

    @property
    def stations(self) -> tuple[StationRecord, ...]:
        """All stations in browsing order."""
        return tuple(
            record for members in self.groups.values() for record in members
        )

    def __len__(self) -> int:
        return len(self.by_id)

    def __contains__(self, station_id: object) -> bool:
        return station_id in self.by_id


@dataclass(frozen=True)
class MediaItem:
    """Browsable entry handed to media-session front ends."""

    media_id: str
    title: str
    icon_uri: str
    media_uri: str
    playable: bool = True


@dataclass(frozen=True)
class PlayableStation:
    """A station resolved for playback: stream URL plus descriptive metadata."""

    media_id: str
    stream_url: str
    title: str
    artwork_url: str
