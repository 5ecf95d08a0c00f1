from pathlib import Path
from typing import BinaryIO

from .exceptions import MZOpenError
from .mz import MZHeader


def open_executable(filepath: Path) -> BinaryIO:
    try:
        return filepath.open("rb")
    except OSError as e:
        raise MZOpenError(f"Failed to open file: {filepath}") from e


def is_mz_executable(f: BinaryIO) -> bool:
    """Peek at the first two bytes of the stream without moving it."""
    pos = f.tell()
    try:
        f.seek(0)
        magic = f.read(2)
    finally:
        f.seek(pos)

    return MZHeader.taste(magic, offset=0)
