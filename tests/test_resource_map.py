"""Map load policy: blank templates, trimming and save target resolution."""

from pathlib import Path

from codec_helper import CopyCodec, make_registry
from planeres.compression.codecs import CodecRegistry
from planeres.compression.types import Compression
from planeres.errors import E_CONFIG, E_DECODE, E_MAP_EMPTY
from planeres.notify import Severity
from planeres.resources import (
    FILE_MAP_DEFAULT,
    load_resource,
    new_map,
    resolve_save_name,
)


def _map_file(tmp_path: Path, size: int, name: str = "map.bin") -> Path:
    p = tmp_path / name
    p.write_bytes(b"\x01\x02" * (size // 2) + b"\x01" * (size % 2))
    return p


def _load(m, tmp_path: Path, registry=None):
    return load_resource(
        m, tmp_path / "tempMap.bin", registry or CodecRegistry()
    )


def test_rejects_invalid_and_kid_chameleon(tmp_path: Path):
    codec = CopyCodec()
    reg = make_registry(kid_chameleon=codec)
    src = _map_file(tmp_path, 80)
    for compression in (None, Compression.KID_CHAMELEON):
        m = new_map(src, x_size=4, y_size=10, compression=compression)
        res = _load(m, tmp_path, reg)
        assert res.error.code == E_CONFIG
        assert "Kid Chameleon" not in res.error.message
    assert codec.calls == []


def test_exact_size_loads_unchanged(tmp_path: Path):
    m = new_map(
        _map_file(tmp_path, 400), x_size=10, y_size=20, compression=Compression.NONE
    )
    res = _load(m, tmp_path)
    assert res.ok
    assert (m.info.x_size, m.info.y_size) == (10, 20)
    assert res.notices == []


def test_undersized_map_is_trimmed(tmp_path: Path):
    m = new_map(
        _map_file(tmp_path, 250), x_size=10, y_size=20, compression=Compression.NONE
    )
    res = _load(m, tmp_path)
    assert res.ok
    assert m.info.y_size == 12
    warnings = res.notices_of(Severity.WARNING)
    assert len(warnings) == 1
    assert "trimmed vertically" in warnings[0].message


def test_larger_map_is_never_grown(tmp_path: Path):
    m = new_map(
        _map_file(tmp_path, 1000), x_size=10, y_size=20, compression=Compression.NONE
    )
    res = _load(m, tmp_path)
    assert res.ok and m.info.y_size == 20
    assert res.decoded_length == 1000


def test_trimming_to_zero_rows_is_fatal(tmp_path: Path):
    m = new_map(
        _map_file(tmp_path, 15), x_size=10, y_size=20, compression=Compression.NONE
    )
    res = _load(m, tmp_path)
    assert res.error.code == E_MAP_EMPTY
    assert m.info.y_size == 0


def test_missing_map_creates_blank_template(tmp_path: Path):
    reg = make_registry(enigma=CopyCodec())
    src = tmp_path / "new_map.eni"
    m = new_map(src, x_size=40, y_size=28, compression=Compression.ENIGMA)
    res = _load(m, tmp_path, reg)
    assert res.ok
    info = res.notices_of(Severity.INFORMATION)
    assert info[0].message == "No map file found, created blank template."
    work = (tmp_path / "tempMap.bin").read_bytes()
    assert len(work) == 2 * 40 * 28
    assert not any(work)
    assert res.decoded_length == 2 * 40 * 28
    assert m.info.y_size == 28
    assert m.info.save_name == src


class _ReadingCodec:
    def decode(self, source, dest, offset, **params):
        data = source.read_bytes()[offset:]
        dest.write_bytes(data)
        return len(data)

    def encode(self, source, dest, **params):
        dest.write_bytes(source.read_bytes())


def test_codec_io_error_on_missing_map_falls_back_to_blank(tmp_path: Path):
    reg = make_registry(enigma=_ReadingCodec())
    m = new_map(
        tmp_path / "new.eni", x_size=4, y_size=2, compression=Compression.ENIGMA
    )
    res = _load(m, tmp_path, reg)
    assert res.ok
    info = res.notices_of(Severity.INFORMATION)
    assert info[0].message == "No map file found, created blank template."
    assert (tmp_path / "tempMap.bin").read_bytes() == bytes(16)


def test_blank_template_replaces_stale_working_file(tmp_path: Path):
    (tmp_path / "tempMap.bin").write_bytes(b"\xff" * 5000)
    m = new_map(
        tmp_path / "absent.bin", x_size=2, y_size=2, compression=Compression.NONE
    )
    res = _load(m, tmp_path)
    assert res.ok
    assert (tmp_path / "tempMap.bin").read_bytes() == bytes(8)


def test_existing_but_undecodable_map_is_fatal(tmp_path: Path):
    reg = make_registry(nemesis=CopyCodec(fail_decode=True))
    m = new_map(
        _map_file(tmp_path, 64), x_size=4, y_size=8, compression=Compression.NEMESIS
    )
    res = _load(m, tmp_path, reg)
    assert res.error.code == E_DECODE
    assert "map file" in res.error.message
    assert not res.notices_of(Severity.INFORMATION)


def test_standalone_map_saves_in_place(tmp_path: Path):
    src = _map_file(tmp_path, 32)
    m = new_map(src, x_size=4, y_size=4, compression=Compression.NONE)
    res = _load(m, tmp_path)
    assert res.ok
    assert m.info.save_name == src


def test_embedded_map_saves_to_default_file(tmp_path: Path):
    rom = _map_file(tmp_path, 0x400, name="game.bin")
    m = new_map(
        rom,
        x_size=4,
        y_size=4,
        offset=0x200,
        length=32,
        compression=Compression.NONE,
    )
    res = _load(m, tmp_path)
    assert res.ok
    assert m.info.save_name == Path(FILE_MAP_DEFAULT)
    notice = res.notices_of(Severity.INFORMATION)[-1]
    assert "cannot overwrite a ROM" in notice.message
    assert FILE_MAP_DEFAULT in notice.message


def test_configured_save_name_is_kept(tmp_path: Path):
    rom = _map_file(tmp_path, 0x400, name="game.bin")
    m = new_map(
        rom,
        x_size=4,
        y_size=4,
        offset=0x200,
        length=32,
        compression=Compression.NONE,
        save_name=tmp_path / "edited.bin",
    )
    res = _load(m, tmp_path)
    assert res.ok
    assert m.info.save_name == tmp_path / "edited.bin"
    assert res.notices == []


def test_resolve_save_name_in_directory(tmp_path: Path):
    m = new_map(tmp_path / "rom.bin", x_size=1, y_size=1, offset=4)
    notices = []
    target = resolve_save_name(m, notices, tmp_path)
    assert target == tmp_path / FILE_MAP_DEFAULT
    assert len(notices) == 1
    # Already resolved: no second notice.
    assert resolve_save_name(m, notices, tmp_path) == target
    assert len(notices) == 1
