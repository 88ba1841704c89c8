"""Error definitions for PlaneRes."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_CONFIG = "E_CONFIG"
E_CODEC_UNAVAILABLE = "E_CODEC_UNAVAILABLE"
E_DECODE = "E_DECODE"
E_MAP_EMPTY = "E_MAP_EMPTY"
E_ENCODE = "E_ENCODE"
E_SAVE_TARGET = "E_SAVE_TARGET"
E_PROJECT = "E_PROJECT"
E_INTERNAL = "E_INTERNAL"


@dataclass
class ResourceError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class ProjectError(ResourceError):
    pass


class CodecError(RuntimeError):
    """Raised by a codec that cannot decode or encode its input."""


def project_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> ProjectError:
    return ProjectError(code=E_PROJECT, message=message, context=context)


def internal_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> ResourceError:
    return ResourceError(code=E_INTERNAL, message=message, context=context)


__all__ = [
    "ResourceError",
    "ProjectError",
    "CodecError",
    "project_error",
    "internal_error",
    "E_CONFIG",
    "E_CODEC_UNAVAILABLE",
    "E_DECODE",
    "E_MAP_EMPTY",
    "E_ENCODE",
    "E_SAVE_TARGET",
    "E_PROJECT",
    "E_INTERNAL",
]
