import io
from pathlib import Path
import pytest

from mzinspect.formats import MZOpenError, is_mz_executable, open_executable


def test_sniff_mz():
    assert is_mz_executable(io.BytesIO(b"MZ\x90\x00"))
    assert not is_mz_executable(io.BytesIO(b"ZM\x90\x00"))
    assert not is_mz_executable(io.BytesIO(b"M"))
    assert not is_mz_executable(io.BytesIO(b""))


def test_sniff_keeps_position():
    f = io.BytesIO(b"MZ\x90\x00")
    f.seek(3)
    assert is_mz_executable(f)
    assert f.tell() == 3


def test_open_executable(tmp_path: Path):
    path = tmp_path / "TEST.EXE"
    path.write_bytes(b"MZ")
    with open_executable(path) as f:
        assert f.read() == b"MZ"


def test_open_missing(tmp_path: Path):
    with pytest.raises(MZOpenError):
        open_executable(tmp_path / "MISSING.EXE")

    # Directories cannot be opened either.
    with pytest.raises(MZOpenError):
        open_executable(tmp_path)
