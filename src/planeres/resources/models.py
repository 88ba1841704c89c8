"""Resource descriptors: a common byte-range record plus per-kind state."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..compression.types import (
    Compression,
    ResourceKind,
    DEFAULT_COMPRESSION,
)

__all__ = [
    "TILE_SIZE",
    "MAP_CELL_SIZE",
    "DEFAULT_KOSINSKI_MODULE_SIZE",
    "FILE_MAP_DEFAULT",
    "ResourceDescriptor",
    "ArtInfo",
    "MapInfo",
    "PaletteInfo",
    "Resource",
    "new_art",
    "new_map",
    "new_palette",
]

TILE_SIZE = 0x20  # 8x8 pixels, 4 bits per pixel
MAP_CELL_SIZE = 2
DEFAULT_KOSINSKI_MODULE_SIZE = 0x1000
FILE_MAP_DEFAULT = "MapDefault.bin"


@dataclass(slots=True)
class ResourceDescriptor:
    source_path: Path
    offset: int = 0
    # 0 means "to end of file" and is only valid with offset 0.
    length: int = 0
    compression: Compression = Compression.INVALID
    kosinski_module_size: int = DEFAULT_KOSINSKI_MODULE_SIZE

    @property
    def embedded(self) -> bool:
        """True when the bytes live inside a larger container (a ROM)."""
        return self.offset != 0


@dataclass(slots=True)
class ArtInfo:
    # Derived on load; never read from configuration.
    tile_amount: int = 0


@dataclass(slots=True)
class MapInfo:
    x_size: int = 0
    y_size: int = 0
    save_name: Optional[Path] = None

    @property
    def expected_length(self) -> int:
        return MAP_CELL_SIZE * self.x_size * self.y_size


@dataclass(slots=True)
class PaletteInfo:
    pass


KindInfo = Union[ArtInfo, MapInfo, PaletteInfo]

_INFO_TYPES = {
    ResourceKind.ART: ArtInfo,
    ResourceKind.MAP: MapInfo,
    ResourceKind.PALETTE: PaletteInfo,
}


@dataclass(slots=True)
class Resource:
    kind: ResourceKind
    descriptor: ResourceDescriptor
    info: KindInfo

    def __post_init__(self) -> None:
        expected = _INFO_TYPES[self.kind]
        if not isinstance(self.info, expected):
            raise TypeError(
                f"{self.kind.value} resource needs {expected.__name__}, "
                f"got {type(self.info).__name__}"
            )

    @property
    def name(self) -> str:
        return self.kind.value


def _descriptor(
    kind: ResourceKind,
    source_path: str | Path,
    offset: int,
    length: int,
    compression: Compression | None,
    kosinski_module_size: int,
) -> ResourceDescriptor:
    return ResourceDescriptor(
        source_path=Path(source_path),
        offset=offset,
        length=length,
        compression=(
            DEFAULT_COMPRESSION[kind] if compression is None else compression
        ),
        kosinski_module_size=kosinski_module_size,
    )


def new_art(
    source_path: str | Path,
    *,
    offset: int = 0,
    length: int = 0,
    compression: Compression | None = None,
    kosinski_module_size: int = DEFAULT_KOSINSKI_MODULE_SIZE,
) -> Resource:
    desc = _descriptor(
        ResourceKind.ART,
        source_path,
        offset,
        length,
        compression,
        kosinski_module_size,
    )
    return Resource(ResourceKind.ART, desc, ArtInfo())


def new_map(
    source_path: str | Path,
    *,
    x_size: int,
    y_size: int,
    offset: int = 0,
    length: int = 0,
    compression: Compression | None = None,
    kosinski_module_size: int = DEFAULT_KOSINSKI_MODULE_SIZE,
    save_name: str | Path | None = None,
) -> Resource:
    desc = _descriptor(
        ResourceKind.MAP,
        source_path,
        offset,
        length,
        compression,
        kosinski_module_size,
    )
    info = MapInfo(
        x_size=x_size,
        y_size=y_size,
        save_name=Path(save_name) if save_name else None,
    )
    return Resource(ResourceKind.MAP, desc, info)


def new_palette(
    source_path: str | Path,
    *,
    offset: int = 0,
    length: int = 0,
    compression: Compression | None = None,
    kosinski_module_size: int = DEFAULT_KOSINSKI_MODULE_SIZE,
) -> Resource:
    desc = _descriptor(
        ResourceKind.PALETTE,
        source_path,
        offset,
        length,
        compression,
        kosinski_module_size,
    )
    return Resource(ResourceKind.PALETTE, desc, PaletteInfo())
