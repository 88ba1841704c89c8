"""Project file parsing and validation."""

import json
from pathlib import Path

import pytest
import yaml

from planeres.compression.types import Compression
from planeres.errors import ProjectError, E_PROJECT
from planeres.project import WORK_DIR_ENV, load_project, validate_project_dict


def _write_yaml(tmp_path: Path, data: dict, name: str = "project.yaml") -> Path:
    p = tmp_path / name
    p.write_text(yaml.safe_dump(data), encoding="utf-8")
    return p


FULL = {
    "version": 1,
    "palette": {"file": "pal.bin"},
    "art": {
        "file": "rom.bin",
        "offset": "0x8000",
        "length": 0,
        "compression": "Moduled Kosinski",
        "kosinski_module_size": "0x800",
    },
    "map": {
        "file": "rom.bin",
        "offset": 0x12000,
        "compression": "Enigma",
        "x_size": 40,
        "y_size": "28",
    },
}


def test_full_project(tmp_path: Path):
    project = load_project(_write_yaml(tmp_path, FULL))
    assert project.work_dir == tmp_path
    assert [r.name for r in project.resources()] == ["palette", "art", "map"]

    pal = project.palette.descriptor
    assert pal.source_path == tmp_path / "pal.bin"
    assert pal.compression is Compression.NONE

    art = project.art.descriptor
    assert art.offset == 0x8000
    assert art.compression is Compression.MODULED_KOSINSKI
    assert art.kosinski_module_size == 0x800

    m = project.map
    assert m.descriptor.offset == 0x12000
    assert m.descriptor.kosinski_module_size == 0x1000
    assert (m.info.x_size, m.info.y_size) == (40, 28)
    assert m.info.save_name is None


def test_json_project_with_save_file(tmp_path: Path):
    data = {
        "map": {
            "file": "level.bin",
            "compression": "None",
            "x_size": 8,
            "y_size": 8,
            "save_file": "out/level.bin",
        }
    }
    p = tmp_path / "project.json"
    p.write_text(json.dumps(data), encoding="utf-8")
    project = load_project(p)
    assert project.palette is None and project.art is None
    assert project.map.info.save_name == tmp_path / "out" / "level.bin"


def test_unknown_compression_parses_to_invalid(tmp_path: Path):
    data = {"art": {"file": "a.bin", "compression": "LZ77"}}
    project = load_project(_write_yaml(tmp_path, data))
    assert project.art.descriptor.compression is Compression.INVALID


def test_work_dir_precedence(tmp_path: Path, monkeypatch):
    data = {"palette": {"file": "pal.bin"}}
    path = _write_yaml(tmp_path, data)
    monkeypatch.setenv(WORK_DIR_ENV, "from_env")
    assert load_project(path).work_dir == tmp_path / "from_env"

    data["work_dir"] = "from_project"
    path = _write_yaml(tmp_path, data)
    assert load_project(path).work_dir == tmp_path / "from_project"
    assert load_project(path, tmp_path / "cli").work_dir == tmp_path / "cli"


def test_schema_errors():
    errs = validate_project_dict({"version": 1})
    assert errs
    errs = validate_project_dict(
        {"map": {"file": "m.bin", "x_size": 4}, "extra": True}
    )
    assert any("y_size" in e for e in errs)
    assert any("extra" in e for e in errs)
    errs = validate_project_dict({"art": {"file": "a.bin", "offset": "0x"}})
    assert any(e.startswith("art.offset") for e in errs)
    assert validate_project_dict({"art": {"file": "a.bin"}}) == []


def test_invalid_projects_raise_project_error(tmp_path: Path):
    with pytest.raises(ProjectError) as exc:
        load_project(tmp_path / "missing.yaml")
    assert exc.value.code == E_PROJECT

    bad = tmp_path / "bad.yaml"
    bad.write_text("art: [unclosed", encoding="utf-8")
    with pytest.raises(ProjectError):
        load_project(bad)

    listy = tmp_path / "list.json"
    listy.write_text("[]", encoding="utf-8")
    with pytest.raises(ProjectError):
        load_project(listy)

    with pytest.raises(ProjectError) as exc:
        load_project(_write_yaml(tmp_path, {"map": {"file": "m.bin"}}))
    assert "validation failed" in exc.value.message
