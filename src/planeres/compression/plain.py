"""Raw byte-range copy and blank placeholder creation."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

__all__ = ["DECODE_FAILED", "read_plain", "check_create_blank_file"]

# Negative decoded length shared by every codec to signal failure.
DECODE_FAILED = -1


def read_plain(
    source: str | Path, dst: BinaryIO, offset: int, length: int
) -> int:
    """Copy ``length`` bytes at ``offset`` of ``source`` into ``dst``.

    ``length == 0`` means "whole file" and is only accepted together with
    ``offset == 0``. ``dst`` is rewound and truncated to the copied range.
    Returns the byte count, or ``DECODE_FAILED`` when the source cannot be
    opened or the range is invalid; ``dst`` is left untouched on failure.
    """
    try:
        src = open(source, "rb")
    except OSError:
        return DECODE_FAILED
    with src:
        if length == 0:
            if offset != 0:
                return DECODE_FAILED
            src.seek(0, 2)
            length = src.tell()
        src.seek(offset)
        dst.seek(0)
        data = src.read(length)
        # A short source is padded so exactly ``length`` bytes are written.
        dst.write(data.ljust(length, b"\x00"))
        dst.truncate()
    return length


def check_create_blank_file(
    source: str | Path, dst: BinaryIO, offset: int, length: int
) -> bool:
    """Write ``offset + length`` zero bytes to ``dst`` if ``source`` is absent.

    Returns True when the blank placeholder was written, False (writing
    nothing) when ``source`` exists.
    """
    if Path(source).exists():
        return False
    dst.write(bytes(offset + length))
    return True
