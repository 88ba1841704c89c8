"""Project file loading (JSON/YAML) for PlaneRes."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..compression.types import Compression, parse_compression
from ..errors import project_error
from ..resources.models import (
    DEFAULT_KOSINSKI_MODULE_SIZE,
    Resource,
    new_art,
    new_map,
    new_palette,
)
from .schema import validate_project_dict

__all__ = [
    "WORK_DIR_ENV",
    "Project",
    "load_project",
    "parse_project_dict",
]

WORK_DIR_ENV = "PLANERES_WORK_DIR"


@dataclass(slots=True)
class Project:
    path: Path
    work_dir: Path
    palette: Optional[Resource] = None
    art: Optional[Resource] = None
    map: Optional[Resource] = None

    @property
    def base_dir(self) -> Path:
        return self.path.parent

    def resources(self) -> list[Resource]:
        """Resources in load order: palette, art, map."""
        return [r for r in (self.palette, self.art, self.map) if r is not None]


def _to_int(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    if isinstance(value, int):
        return value
    return int(str(value).strip(), 0)


def _compression(entry: Dict[str, Any]) -> Compression | None:
    name = entry.get("compression")
    if name is None:
        return None
    return parse_compression(name)


def _common(entry: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "offset": _to_int(entry.get("offset")),
        "length": _to_int(entry.get("length")),
        "compression": _compression(entry),
        "kosinski_module_size": _to_int(
            entry.get("kosinski_module_size"), DEFAULT_KOSINSKI_MODULE_SIZE
        ),
    }


def _resolve(base_dir: Path, p: str) -> Path:
    # ROM images commonly live outside the project folder, so no sandboxing.
    path = Path(p).expanduser()
    return path if path.is_absolute() else base_dir / path


def parse_project_dict(
    data: Dict[str, Any],
    path: str | Path,
    work_dir: str | Path | None = None,
) -> Project:
    errors = validate_project_dict(data)
    if errors:
        raise project_error(
            "Project validation failed: " + "; ".join(errors),
            {"path": str(path)},
        )
    path = Path(path)
    base_dir = path.parent
    if work_dir is None:
        work_dir = data.get("work_dir") or os.environ.get(WORK_DIR_ENV)
    resolved_work = (
        _resolve(base_dir, str(work_dir)) if work_dir else base_dir
    )
    project = Project(path=path, work_dir=resolved_work)

    if "palette" in data:
        e = data["palette"]
        project.palette = new_palette(
            _resolve(base_dir, e["file"]), **_common(e)
        )
    if "art" in data:
        e = data["art"]
        project.art = new_art(
            _resolve(base_dir, e["file"]), **_common(e)
        )
    if "map" in data:
        e = data["map"]
        save_file = e.get("save_file")
        project.map = new_map(
            _resolve(base_dir, e["file"]),
            x_size=_to_int(e["x_size"]),
            y_size=_to_int(e["y_size"]),
            save_name=_resolve(base_dir, save_file) if save_file else None,
            **_common(e),
        )
    return project


def load_project(
    path: str | Path, work_dir: str | Path | None = None
) -> Project:
    p = Path(path)
    if not p.exists():
        raise project_error(f"Project file not found: {p}", {"path": str(p)})
    text = p.read_text(encoding="utf-8")
    try:
        if p.suffix.lower() in {".yaml", ".yml"}:
            data: Any = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise project_error(
            f"Could not parse project file: {exc}", {"path": str(p)}
        ) from exc
    if not isinstance(data, dict):
        raise project_error(
            "Root of project file must be an object", {"path": str(p)}
        )
    return parse_project_dict(data, p, work_dir)
