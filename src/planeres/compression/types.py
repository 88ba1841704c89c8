"""Compression tags, resource kinds and the per-kind allow-list."""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, FrozenSet

__all__ = [
    "Compression",
    "ResourceKind",
    "ALLOWED_COMPRESSIONS",
    "DEFAULT_COMPRESSION",
    "DISPLAY_NAMES",
    "is_allowed",
    "parse_compression",
    "allowed_names",
]


class Compression(Enum):
    INVALID = "invalid"
    NONE = "none"
    ENIGMA = "enigma"
    KOSINSKI = "kosinski"
    MODULED_KOSINSKI = "moduled_kosinski"
    NEMESIS = "nemesis"
    KID_CHAMELEON = "kid_chameleon"
    COMPER = "comper"
    SAXMAN = "saxman"


class ResourceKind(Enum):
    ART = "art"
    MAP = "map"
    PALETTE = "palette"


# Names as written in project files and operator messages, in menu order.
DISPLAY_NAMES: Dict[Compression, str] = {
    Compression.NONE: "None",
    Compression.ENIGMA: "Enigma",
    Compression.KOSINSKI: "Kosinski",
    Compression.MODULED_KOSINSKI: "Moduled Kosinski",
    Compression.NEMESIS: "Nemesis",
    Compression.KID_CHAMELEON: "Kid Chameleon",
    Compression.COMPER: "Comper",
    Compression.SAXMAN: "Saxman",
}

_REAL: FrozenSet[Compression] = frozenset(DISPLAY_NAMES)

# Kid Chameleon's format only encodes tile art.
ALLOWED_COMPRESSIONS: Dict[ResourceKind, FrozenSet[Compression]] = {
    ResourceKind.ART: _REAL,
    ResourceKind.MAP: _REAL - {Compression.KID_CHAMELEON},
    ResourceKind.PALETTE: _REAL,
}

# Older project files never tagged palettes, which were always raw.
DEFAULT_COMPRESSION: Dict[ResourceKind, Compression] = {
    ResourceKind.ART: Compression.INVALID,
    ResourceKind.MAP: Compression.INVALID,
    ResourceKind.PALETTE: Compression.NONE,
}

_SEPARATORS = re.compile(r"[\s_\-]+")
_BY_KEY: Dict[str, Compression] = {
    _SEPARATORS.sub("", name).lower(): tag
    for tag, name in DISPLAY_NAMES.items()
}


def is_allowed(kind: ResourceKind, compression: Compression) -> bool:
    return compression in ALLOWED_COMPRESSIONS[kind]


def parse_compression(text: str) -> Compression:
    """Map a project-file name to its tag; unknown names give INVALID."""
    return _BY_KEY.get(_SEPARATORS.sub("", text).lower(), Compression.INVALID)


def allowed_names(kind: ResourceKind) -> list[str]:
    allowed = ALLOWED_COMPRESSIONS[kind]
    return [name for tag, name in DISPLAY_NAMES.items() if tag in allowed]
