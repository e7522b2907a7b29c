from .station import (
    CatalogIndex,
    InitializationState,
    MediaItem,
    PlayableStation,
    StationRecord,
)

__all__ = [
    "CatalogIndex",
    "InitializationState",
    "MediaItem",
    "PlayableStation",
    "StationRecord",
]
