"""Stand-in codecs for tests.

``CopyCodec`` "decodes" by copying the source from ``offset`` to the end
and "encodes" by copying the working file, recording every call.
"""

from __future__ import annotations

from pathlib import Path

from planeres.compression.codecs import CodecRegistry
from planeres.errors import CodecError


class CopyCodec:
    def __init__(self, fail_decode: bool = False, fail_encode: bool = False):
        self.fail_decode = fail_decode
        self.fail_encode = fail_encode
        self.calls: list[tuple] = []

    def decode(self, source: Path, dest: Path, offset: int, **params) -> int:
        self.calls.append(("decode", source, dest, offset, params))
        if self.fail_decode or not source.exists():
            return -1
        data = source.read_bytes()[offset:]
        dest.write_bytes(data)
        return len(data)

    def encode(self, source: Path, dest: Path, **params) -> None:
        self.calls.append(("encode", source, dest, params))
        if self.fail_encode:
            raise CodecError("encoder rejected input")
        dest.write_bytes(source.read_bytes())


def make_registry(**codecs) -> CodecRegistry:
    reg = CodecRegistry()
    for name, codec in codecs.items():
        reg.register(name, codec)
    return reg
