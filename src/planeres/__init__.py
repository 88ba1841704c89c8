"""PlaneRes package

Loads compressed plane maps, tile art and palettes out of ROM images or
standalone asset files into uncompressed working copies, and re-compresses
edited working copies back.

Prefer the high level entry points in :mod:`planeres.api`; the resource
policy lives in :mod:`planeres.resources.loader` and codec dispatch in
:mod:`planeres.compression.codecs`.
"""

from ._version import __version__  # noqa: F401

__all__ = ["__version__"]
