"""High-level API for PlaneRes.

``open_project`` loads every resource of a project into working files;
``save_project`` re-compresses the edited map. Neither exits the process:
failures come back as ``ProjectSession.error`` / ``ResourceError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .compression.codecs import CodecRegistry
from .compression.types import ResourceKind
from .errors import ResourceError, E_SAVE_TARGET
from .logging import get_logger
from .notify import Notice
from .project.loader import Project, load_project
from .reporting import get_reporter, task
from .resources.loader import (
    LoadResult,
    load_resource,
    resolve_save_name,
    save_resource,
)
from .resources.models import ArtInfo, MapInfo

__all__ = [
    "WORKING_FILES",
    "ProjectSession",
    "working_path",
    "open_project",
    "save_project",
]

WORKING_FILES: Dict[ResourceKind, str] = {
    ResourceKind.PALETTE: "tempPal.bin",
    ResourceKind.ART: "tempArt.bin",
    ResourceKind.MAP: "tempMap.bin",
}


@dataclass(slots=True)
class ProjectSession:
    project: Project
    results: Dict[ResourceKind, LoadResult] = field(default_factory=dict)

    @property
    def error(self) -> Optional[ResourceError]:
        for res in self.results.values():
            if res.error is not None:
                return res.error
        return None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def notices(self) -> List[Notice]:
        return [n for res in self.results.values() for n in res.notices]


def working_path(project: Project, kind: ResourceKind) -> Path:
    return project.work_dir / WORKING_FILES[kind]


def _summary(res: LoadResult) -> str:
    info = res.resource.info
    parts = [f"bytes={res.decoded_length}"]
    if isinstance(info, ArtInfo):
        parts.append(f"tiles={info.tile_amount}")
    elif isinstance(info, MapInfo):
        parts.append(f"size={info.x_size}x{info.y_size}")
        parts.append(f"save={info.save_name}")
    return f"{res.resource.name.capitalize()} summary: " + " ".join(parts)


def open_project(
    project: Project | str | Path,
    *,
    work_dir: str | Path | None = None,
    registry: CodecRegistry | None = None,
) -> ProjectSession:
    """Load palette, art and map (in that order) into working files.

    Loading stops at the first resource that fails.
    """
    logger = get_logger()
    rep = get_reporter()
    if not isinstance(project, Project):
        project = load_project(project, work_dir)
    elif work_dir is not None:
        project.work_dir = Path(work_dir)
    project.work_dir.mkdir(parents=True, exist_ok=True)
    session = ProjectSession(project=project)
    resources = project.resources()
    with task("project.load", "Load resources", total=len(resources)) as final:
        total_bytes = 0
        for resource in resources:
            dest = working_path(project, resource.kind)
            res = load_resource(
                resource, dest, registry, save_dir=project.base_dir
            )
            session.results[resource.kind] = res
            rep.advance("project.load", current_item=resource.name)
            if not res.ok:
                logger.debug("stopping after failed %s load", resource.name)
                break
            total_bytes += res.decoded_length
            rep.status(_summary(res))
        final["resources"] = len(session.results)
        final["bytes"] = total_bytes
    if session.ok:
        rep.status(
            f"Project summary: file={project.path.name} "
            f"resources={len(session.results)} bytes={total_bytes} "
            f"work_dir={project.work_dir}"
        )
    return session


def save_project(
    project: Project | ProjectSession | str | Path,
    *,
    work_dir: str | Path | None = None,
    registry: CodecRegistry | None = None,
) -> Path:
    """Re-compress the working map into its save target.

    The save target is the configured ``save_file``; otherwise it is
    resolved the same way loading does.
    """
    if isinstance(project, ProjectSession):
        project = project.project
    elif not isinstance(project, Project):
        project = load_project(project, work_dir)
    if work_dir is not None:
        project.work_dir = Path(work_dir)
    if project.map is None:
        raise ResourceError(E_SAVE_TARGET, "Project has no map to save.")
    notices: List[Notice] = []
    target = resolve_save_name(project.map, notices, project.base_dir)
    working = working_path(project, ResourceKind.MAP)
    with task("project.save", "Save map") as final:
        save_resource(project.map, working, target, registry)
        final["bytes"] = target.stat().st_size
    get_reporter().status(
        f"Save summary: file={target} bytes={final['bytes']}"
    )
    return target
