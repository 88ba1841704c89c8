"""Load resources into working copies and save them back.

``load_resource`` never raises for problems in the resource itself: the
outcome, including any fatal error, is returned as a ``LoadResult`` and the
caller decides whether to stop. Recoverable conditions (a missing map, an
undersized map) are resolved here and reported as notices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..compression.codecs import (
    CodecRegistry,
    decode_to_file,
    encode_file,
    resolve_codec,
)
from ..compression.plain import check_create_blank_file
from ..compression.types import (
    ResourceKind,
    allowed_names,
    is_allowed,
)
from ..errors import (
    ResourceError,
    E_CONFIG,
    E_DECODE,
    E_MAP_EMPTY,
    E_SAVE_TARGET,
)
from ..logging import get_logger
from ..notify import Notice, Severity, notify
from .models import (
    FILE_MAP_DEFAULT,
    TILE_SIZE,
    ArtInfo,
    MapInfo,
    Resource,
)

__all__ = [
    "LoadResult",
    "load_resource",
    "save_resource",
    "resolve_save_name",
    "default_save_target",
]

log = get_logger("resources")

_TITLES = {
    Severity.ERROR: "Error",
    Severity.WARNING: "Warning",
    Severity.INFORMATION: "Information",
}


@dataclass(slots=True)
class LoadResult:
    resource: Resource
    dest: Path
    # Directory for MapDefault.bin when an embedded map needs a save target.
    save_dir: Optional[Path] = None
    decoded_length: int = 0
    error: Optional[ResourceError] = None
    notices: List[Notice] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def notices_of(self, severity: Severity) -> List[Notice]:
        return [n for n in self.notices if n.severity is severity]


def _notify(result: LoadResult, severity: Severity, message: str) -> None:
    notify(result.notices, severity, _TITLES[severity], message)


def _check_compression(resource: Resource) -> None:
    compression = resource.descriptor.compression
    if is_allowed(resource.kind, compression):
        return
    names = "\n".join(f"'{n}'" for n in allowed_names(resource.kind))
    raise ResourceError(
        E_CONFIG,
        f"Invalid {resource.name} compression format. "
        f"Should be one of the following:\n\n{names}",
        {"kind": resource.name, "compression": compression.value},
    )


def _decode_failed(resource: Resource) -> ResourceError:
    return ResourceError(
        E_DECODE,
        f"Could not decompress {resource.name} file. "
        "Are you sure the compression is correct?",
        {
            "source": str(resource.descriptor.source_path),
            "offset": resource.descriptor.offset,
            "compression": resource.descriptor.compression.value,
        },
    )


def _decode(
    resource: Resource, dest: Path, registry: CodecRegistry | None
) -> int:
    _check_compression(resource)
    return decode_to_file(resource.descriptor, dest, registry)


def _load_art(result: LoadResult, registry: CodecRegistry | None) -> None:
    resource = result.resource
    length = _decode(resource, result.dest, registry)
    if length < 0:
        raise _decode_failed(resource)
    result.decoded_length = length
    assert isinstance(resource.info, ArtInfo)
    # A trailing partial tile is not counted.
    resource.info.tile_amount = length // TILE_SIZE


def _load_palette(result: LoadResult, registry: CodecRegistry | None) -> None:
    length = _decode(result.resource, result.dest, registry)
    if length < 0:
        raise _decode_failed(result.resource)
    result.decoded_length = length


def _load_map(result: LoadResult, registry: CodecRegistry | None) -> None:
    resource = result.resource
    desc = resource.descriptor
    info = resource.info
    assert isinstance(info, MapInfo)

    length = _decode(resource, result.dest, registry)
    if length < 0:
        # Missing source: start from a blank template of the declared size.
        length = info.expected_length
        result.dest.touch(exist_ok=True)
        with result.dest.open("r+b") as stream:
            created = check_create_blank_file(
                desc.source_path, stream, desc.offset, length
            )
            if created:
                stream.truncate()
        if not created:
            raise _decode_failed(resource)
        _notify(
            result,
            Severity.INFORMATION,
            "No map file found, created blank template.",
        )

    if length < info.expected_length:
        _notify(
            result,
            Severity.WARNING,
            "Specified size exceeds map size.\n"
            "Field has been trimmed vertically.",
        )
        info.y_size = length // info.x_size // 2
        if info.y_size == 0:
            raise ResourceError(
                E_MAP_EMPTY,
                "Map holds less than one row of data.",
                {"decoded_length": length, "x_size": info.x_size},
            )
    result.decoded_length = length
    resolve_save_name(resource, result.notices, result.save_dir)


_LOADERS: Dict[
    ResourceKind, Callable[[LoadResult, Optional[CodecRegistry]], None]
] = {
    ResourceKind.ART: _load_art,
    ResourceKind.MAP: _load_map,
    ResourceKind.PALETTE: _load_palette,
}


def load_resource(
    resource: Resource,
    dest: str | Path,
    registry: CodecRegistry | None = None,
    *,
    save_dir: str | Path | None = None,
) -> LoadResult:
    """Decode ``resource`` into the working file ``dest``.

    The returned result carries the decoded length, any notices, and the
    error that stopped the load (``result.ok`` is False in that case).
    """
    result = LoadResult(
        resource=resource,
        dest=Path(dest),
        save_dir=Path(save_dir) if save_dir is not None else None,
    )
    log.debug(
        "loading %s from %s", resource.name, resource.descriptor.source_path
    )
    try:
        _LOADERS[resource.kind](result, registry)
    except ResourceError as exc:
        result.error = exc
        notify(result.notices, Severity.ERROR, "Error", exc.message)
    return result


def resolve_save_name(
    resource: Resource,
    notices: List[Notice],
    default_dir: str | Path | None = None,
) -> Path:
    """Fill in the map's save target when configuration left it empty.

    Standalone files are overwritten in place. Embedded maps go to
    ``FILE_MAP_DEFAULT`` (inside ``default_dir`` when given) so the
    surrounding container is never rewritten.
    """
    info = resource.info
    assert isinstance(info, MapInfo)
    if info.save_name is not None:
        return info.save_name
    if not resource.descriptor.embedded:
        info.save_name = resource.descriptor.source_path
    else:
        target = Path(FILE_MAP_DEFAULT)
        if default_dir is not None:
            target = Path(default_dir) / target
        notify(
            notices,
            Severity.INFORMATION,
            "Information",
            "This tool cannot overwrite a ROM. "
            f"Plane map will be saved to {target}",
        )
        info.save_name = target
    return info.save_name


def default_save_target(resource: Resource) -> Path:
    """Where ``save_resource`` writes when no destination is given."""
    info = resource.info
    if isinstance(info, MapInfo):
        if info.save_name is None:
            raise ResourceError(
                E_SAVE_TARGET,
                "Map save target is unresolved; load the map first.",
            )
        return info.save_name
    if resource.descriptor.embedded:
        raise ResourceError(
            E_SAVE_TARGET,
            f"Refusing to overwrite the container holding the {resource.name}; "
            "give an explicit destination.",
            {"source": str(resource.descriptor.source_path)},
        )
    return resource.descriptor.source_path


def save_resource(
    resource: Resource,
    working: str | Path,
    dest: str | Path | None = None,
    registry: CodecRegistry | None = None,
) -> Path:
    """Compress ``working`` into ``dest`` and delete ``working``.

    Once a codec has been found, the working file is removed whether or
    not compression succeeded.
    """
    working = Path(working)
    target = Path(dest) if dest is not None else default_save_target(resource)
    _check_compression(resource)
    resolve_codec(resource.descriptor.compression, registry)
    if working.resolve() == target.resolve():
        raise ResourceError(
            E_SAVE_TARGET,
            "Working file and save target must differ.",
            {"path": str(target)},
        )
    try:
        encode_file(resource.descriptor, working, target, registry)
    finally:
        working.unlink(missing_ok=True)
    log.debug("saved %s to %s", resource.name, target)
    return target
