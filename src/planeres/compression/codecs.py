"""Codec registry and compression dispatch.

Each compression tag maps to a named codec plus the format parameters it
is invoked with. Only the ``none`` codec ships with PlaneRes; the real
formats (Enigma, Kosinski, Nemesis, ...) are supplied by plugins through
the ``planeres.codecs`` entry-point group or ``CodecRegistry.register``.

Codec contract:
- ``decode(source, dest, offset, **params) -> int`` writes the decoded
  bytes to ``dest`` and returns their count, or a negative value on
  failure (raising ``CodecError`` is treated the same way).
- ``encode(source, dest, **params) -> None`` writes the compressed form of
  ``source`` to ``dest``; failure is signalled by raising.
"""

from __future__ import annotations

import importlib.metadata
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Protocol

from ..errors import (
    CodecError,
    ResourceError,
    E_CODEC_UNAVAILABLE,
    E_ENCODE,
    internal_error,
)
from ..logging import get_logger
from .plain import DECODE_FAILED, read_plain
from .types import Compression

if TYPE_CHECKING:
    from ..resources.models import ResourceDescriptor

__all__ = [
    "Codec",
    "PlainCodec",
    "CodecBinding",
    "CodecRegistry",
    "CODEC_BINDINGS",
    "get_global_registry",
    "resolve_codec",
    "decode_to_file",
    "encode_file",
]

log = get_logger("codecs")


class Codec(Protocol):
    def decode(
        self, source: Path, dest: Path, offset: int, **params: Any
    ) -> int: ...

    def encode(self, source: Path, dest: Path, **params: Any) -> None: ...


class PlainCodec:
    """The ``None`` compression: a raw byte-range copy in, a move out."""

    def decode(
        self,
        source: Path,
        dest: Path,
        offset: int,
        *,
        length: int = 0,
        **params: Any,
    ) -> int:
        created = not dest.exists()
        dest.touch()
        with dest.open("r+b") as dst:
            result = read_plain(source, dst, offset, length)
        if result < 0 and created:
            dest.unlink()
        return result

    def encode(self, source: Path, dest: Path, **params: Any) -> None:
        # Destructive: the working file ends up at ``dest``.
        if not source.exists():
            raise CodecError(f"working file not found: {source}")
        dest.unlink(missing_ok=True)
        shutil.move(str(source), str(dest))


@dataclass(slots=True, frozen=True)
class CodecBinding:
    codec: str
    params: Dict[str, Any] = field(default_factory=dict)


CODEC_BINDINGS: Dict[Compression, CodecBinding] = {
    Compression.NONE: CodecBinding("none"),
    Compression.ENIGMA: CodecBinding("enigma"),
    Compression.KOSINSKI: CodecBinding("kosinski", {"moduled": False}),
    Compression.MODULED_KOSINSKI: CodecBinding("kosinski", {"moduled": True}),
    Compression.NEMESIS: CodecBinding("nemesis"),
    Compression.KID_CHAMELEON: CodecBinding("kid_chameleon"),
    Compression.COMPER: CodecBinding("comper"),
    Compression.SAXMAN: CodecBinding("saxman"),
}


class CodecRegistry:
    ENTRYPOINT_GROUP = "planeres.codecs"

    def __init__(self, *, builtin: bool = True) -> None:
        self._codecs: Dict[str, Codec] = {}
        if builtin:
            self.register("none", PlainCodec())

    def register(
        self, name: str, codec: Codec, *, replace: bool = False
    ) -> None:
        key = name.lower()
        if key in self._codecs and not replace:
            raise ValueError(f"Codec '{name}' already registered")
        self._codecs[key] = codec
        log.debug("Registered codec '%s'", key)

    def resolve(self, name: str) -> Codec:
        key = name.lower()
        if key not in self._codecs:
            raise KeyError(f"Unknown codec '{name}'")
        return self._codecs[key]

    def names(self) -> Iterable[str]:
        return sorted(self._codecs)

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._codecs

    def load_plugins(self) -> None:
        """Register every codec advertised under ``planeres.codecs``.

        An entry point may name a codec class (instantiated without
        arguments) or a ready codec object.
        """
        for entry_point in importlib.metadata.entry_points().select(
            group=self.ENTRYPOINT_GROUP
        ):
            try:
                obj = entry_point.load()
                codec = obj() if isinstance(obj, type) else obj
                self.register(entry_point.name, codec, replace=True)
            except Exception as exc:  # pragma: no cover
                log.error(
                    "Failed to load codec plugin '%s': %s",
                    entry_point.name,
                    exc,
                )


_GLOBAL_REGISTRY: Optional[CodecRegistry] = None


def get_global_registry() -> CodecRegistry:
    global _GLOBAL_REGISTRY
    if _GLOBAL_REGISTRY is None:
        _GLOBAL_REGISTRY = CodecRegistry()
        _GLOBAL_REGISTRY.load_plugins()
    return _GLOBAL_REGISTRY


def resolve_codec(
    compression: Compression, registry: CodecRegistry | None = None
) -> tuple[Codec, CodecBinding]:
    """Codec and binding serving ``compression``.

    Raises ``E_CODEC_UNAVAILABLE`` when the codec is not installed.
    """
    binding = CODEC_BINDINGS.get(compression)
    if binding is None:
        raise internal_error(
            f"No codec for compression {compression.name}",
            {"compression": compression.value},
        )
    if registry is None:
        registry = get_global_registry()
    try:
        return registry.resolve(binding.codec), binding
    except KeyError:
        raise ResourceError(
            E_CODEC_UNAVAILABLE,
            f"No '{binding.codec}' codec is installed",
            {"compression": compression.value, "codec": binding.codec},
        ) from None


def decode_to_file(
    desc: "ResourceDescriptor",
    dest: str | Path,
    registry: CodecRegistry | None = None,
) -> int:
    """Decode ``desc`` into ``dest``; returns the decoded length or < 0."""
    codec, binding = resolve_codec(desc.compression, registry)
    params = dict(binding.params)
    if desc.compression is Compression.NONE:
        params["length"] = desc.length
    log.debug(
        "decode %s@%#x via %s %s",
        desc.source_path,
        desc.offset,
        binding.codec,
        params,
    )
    try:
        length = codec.decode(
            Path(desc.source_path), Path(dest), desc.offset, **params
        )
    except (CodecError, OSError) as exc:
        log.debug("decode failed: %s", exc)
        return DECODE_FAILED
    if length < 0:
        return DECODE_FAILED
    log.debug("decoded %d bytes into %s", length, dest)
    return length


def encode_file(
    desc: "ResourceDescriptor",
    source: str | Path,
    dest: str | Path,
    registry: CodecRegistry | None = None,
) -> None:
    """Compress working file ``source`` into ``dest`` using ``desc``'s tag."""
    codec, binding = resolve_codec(desc.compression, registry)
    params = dict(binding.params)
    if binding.codec == "kosinski":
        params["module_size"] = desc.kosinski_module_size
    log.debug("encode %s -> %s via %s %s", source, dest, binding.codec, params)
    try:
        codec.encode(Path(source), Path(dest), **params)
    except (CodecError, OSError) as exc:
        raise ResourceError(
            E_ENCODE,
            f"Could not compress {Path(source).name}: {exc}",
            {"source": str(source), "dest": str(dest), "codec": binding.codec},
        ) from exc
