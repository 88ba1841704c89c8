from .models import (
    TILE_SIZE,
    FILE_MAP_DEFAULT,
    ResourceDescriptor,
    ArtInfo,
    MapInfo,
    PaletteInfo,
    Resource,
    new_art,
    new_map,
    new_palette,
)
from .loader import (
    LoadResult,
    load_resource,
    save_resource,
    resolve_save_name,
)

__all__ = [
    "TILE_SIZE",
    "FILE_MAP_DEFAULT",
    "ResourceDescriptor",
    "ArtInfo",
    "MapInfo",
    "PaletteInfo",
    "Resource",
    "new_art",
    "new_map",
    "new_palette",
    "LoadResult",
    "load_resource",
    "save_resource",
    "resolve_save_name",
]
