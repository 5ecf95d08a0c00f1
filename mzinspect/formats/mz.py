"""
DOS MZ executable header, relocation table and load image geometry.

Based on the following resources:
- http://www.delorie.com/djgpp/doc/exe/
- https://wiki.osdev.org/MZ
"""

from dataclasses import dataclass
import logging
import struct
from typing import BinaryIO, Iterator

from .exceptions import (
    HeaderTruncatedError,
    MZGeometryError,
    MZParseError,
    RelocationTableTruncatedError,
)

logger = logging.getLogger(__name__)

# "MZ" read as a little-endian 16-bit value.
MZ_SIGNATURE = 0x5A4D

MZ_PAGE_SIZE = 512
MZ_PARAGRAPH_SIZE = 16

# Only the start of the load image is inspected.
DEFAULT_CODE_WINDOW = 1024

_HEADER_FMT = "<14H"
MZ_HEADER_SIZE = struct.calcsize(_HEADER_FMT)

_RELOCATION_FMT = "<2H"
RELOCATION_ENTRY_SIZE = struct.calcsize(_RELOCATION_FMT)


# pylint: disable=too-many-instance-attributes
@dataclass(frozen=True)
class MZHeader:
    # Order is significant!
    signature: int
    lastsize: int
    nblocks: int
    nreloc: int
    hdrsize: int
    minalloc: int
    maxalloc: int
    ss: int
    sp: int
    checksum: int
    ip: int
    cs: int
    relocpos: int
    noverlay: int

    @classmethod
    def from_memory(cls, data: bytes, offset: int) -> tuple["MZHeader", int]:
        available = len(data) - offset
        if available < MZ_HEADER_SIZE:
            raise HeaderTruncatedError(
                f"Truncated header: need {MZ_HEADER_SIZE} bytes, got {max(available, 0)}"
            )
        items = struct.unpack_from(_HEADER_FMT, data, offset)
        return cls(*items), offset + MZ_HEADER_SIZE

    @classmethod
    def taste(cls, data: bytes, offset: int) -> bool:
        return data[offset : offset + 2] == b"MZ"

    @property
    def has_signature(self) -> bool:
        return self.signature == MZ_SIGNATURE

    @property
    def file_size(self) -> int:
        """Size of the file in bytes as announced by the page counts.
        This is not checked against the real size of the file on disk."""
        if self.nblocks == 0:
            raise MZGeometryError(
                "Header reports 0 pages in file, cannot estimate file size"
            )

        return (self.nblocks - 1) * MZ_PAGE_SIZE + self.lastsize

    @property
    def code_start(self) -> int:
        """File offset where the load image begins."""
        return self.hdrsize * MZ_PARAGRAPH_SIZE


@dataclass(frozen=True)
class RelocationEntry:
    offset: int
    segment: int

    @classmethod
    def from_memory(cls, data: bytes, offset: int) -> tuple["RelocationEntry", int]:
        if len(data) - offset < RELOCATION_ENTRY_SIZE:
            raise MZParseError(f"Truncated relocation entry at offset {offset}")
        items = struct.unpack_from(_RELOCATION_FMT, data, offset)
        return cls(*items), offset + RELOCATION_ENTRY_SIZE


@dataclass(frozen=True)
class MZGeometry:
    file_size: int
    code_start: int
    code_size: int

    @classmethod
    def from_header(
        cls, header: MZHeader, code_window: int = DEFAULT_CODE_WINDOW
    ) -> "MZGeometry":
        file_size = header.file_size
        code_start = header.code_start

        if code_start > file_size:
            raise MZGeometryError(
                f"Code starts at offset 0x{code_start:x}, past the estimated end of file ({file_size} bytes)"
            )

        return cls(
            file_size=file_size,
            code_start=code_start,
            code_size=min(file_size - code_start, code_window),
        )


def read_header(f: BinaryIO) -> MZHeader:
    f.seek(0)
    header, _ = MZHeader.from_memory(f.read(MZ_HEADER_SIZE), 0)
    return header


def read_relocations(f: BinaryIO, header: MZHeader) -> Iterator[RelocationEntry]:
    """Yield each entry of the relocation table in index order.
    Raises RelocationTableTruncatedError at the first incomplete entry."""
    if header.nreloc == 0:
        return

    f.seek(header.relocpos)
    for i in range(header.nreloc):
        data = f.read(RELOCATION_ENTRY_SIZE)
        if len(data) < RELOCATION_ENTRY_SIZE:
            raise RelocationTableTruncatedError(
                f"Relocation table truncated after {i} of {header.nreloc} entries",
                entries_read=i,
                entries_expected=header.nreloc,
            )

        entry, _ = RelocationEntry.from_memory(data, 0)
        yield entry


def read_code(f: BinaryIO, geometry: MZGeometry) -> bytes:
    """Read the inspected part of the load image.
    If the file is shorter than the header claims, return only what is there."""
    f.seek(geometry.code_start)
    code = f.read(geometry.code_size)

    if len(code) < geometry.code_size:
        logger.warning(
            "Expected %d code bytes at offset 0x%x but the file ends after %d",
            geometry.code_size,
            geometry.code_start,
            len(code),
        )

    return code
