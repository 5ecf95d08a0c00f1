import io
import struct
import pytest

from mzinspect.formats.exceptions import (
    HeaderTruncatedError,
    MZGeometryError,
    MZParseError,
    RelocationTableTruncatedError,
)
from mzinspect.formats.mz import (
    MZGeometry,
    MZHeader,
    RelocationEntry,
    read_code,
    read_header,
    read_relocations,
)
from .mz_image import mz_header, mz_image


def test_header_fields():
    data = struct.pack(
        "<14H", 0x5A4D, 100, 2, 3, 4, 5, 0xFFFF, 0x10, 0xB8, 0x1234, 7, 8, 0x1C, 1
    )
    header, offset = MZHeader.from_memory(data, 0)
    assert offset == 28
    assert header.signature == 0x5A4D
    assert header.has_signature
    assert header.lastsize == 100
    assert header.nblocks == 2
    assert header.nreloc == 3
    assert header.hdrsize == 4
    assert header.minalloc == 5
    assert header.maxalloc == 0xFFFF
    assert header.ss == 0x10
    assert header.sp == 0xB8
    assert header.checksum == 0x1234
    assert header.ip == 7
    assert header.cs == 8
    assert header.relocpos == 0x1C
    assert header.noverlay == 1


def test_header_is_immutable():
    header, _ = MZHeader.from_memory(mz_header(), 0)
    with pytest.raises(AttributeError):
        header.nblocks = 5  # type: ignore[misc]


def test_header_from_offset():
    """The header can be read from any position in the buffer."""
    data = b"\xff" * 5 + mz_header(nblocks=9)
    header, offset = MZHeader.from_memory(data, 5)
    assert header.nblocks == 9
    assert offset == 33


@pytest.mark.parametrize("size", (0, 2, 27))
def test_header_truncated(size: int):
    with pytest.raises(HeaderTruncatedError):
        MZHeader.from_memory(mz_header()[:size], 0)


def test_header_truncated_is_parse_error():
    with pytest.raises(MZParseError):
        read_header(io.BytesIO(b"MZ\x00\x00"))


def test_taste():
    assert MZHeader.taste(b"MZ", 0)
    assert MZHeader.taste(b"xxMZ", 2)
    assert not MZHeader.taste(b"ZM", 0)
    assert not MZHeader.taste(b"mz", 0)
    assert not MZHeader.taste(b"M", 0)
    assert not MZHeader.taste(b"", 0)


@pytest.mark.parametrize(
    "nblocks, lastsize, expected",
    (
        (1, 0, 0),
        (1, 100, 100),
        (2, 100, 612),
        (2, 0, 512),
        (3, 511, 1535),
        (0xFFFF, 0xFFFF, 0xFFFE * 512 + 0xFFFF),
    ),
)
def test_file_size(nblocks: int, lastsize: int, expected: int):
    header, _ = MZHeader.from_memory(mz_header(nblocks=nblocks, lastsize=lastsize), 0)
    assert header.file_size == expected


def test_file_size_zero_pages():
    """Must not wrap around to a huge value."""
    header, _ = MZHeader.from_memory(mz_header(nblocks=0, lastsize=100), 0)
    with pytest.raises(MZGeometryError):
        _ = header.file_size


def test_geometry():
    header, _ = MZHeader.from_memory(mz_header(nblocks=2, lastsize=100, hdrsize=2), 0)
    geometry = MZGeometry.from_header(header)
    assert geometry.file_size == 612
    assert geometry.code_start == 32
    assert geometry.code_size == 580


def test_geometry_window_limit():
    header, _ = MZHeader.from_memory(mz_header(nblocks=10, hdrsize=2), 0)
    assert MZGeometry.from_header(header).code_size == 1024
    assert MZGeometry.from_header(header, code_window=16).code_size == 16
    assert MZGeometry.from_header(header, code_window=0).code_size == 0


def test_geometry_empty_code():
    """Code region starts exactly at the end of the file."""
    header, _ = MZHeader.from_memory(mz_header(nblocks=1, lastsize=32, hdrsize=2), 0)
    geometry = MZGeometry.from_header(header)
    assert geometry.code_size == 0


def test_geometry_code_past_end():
    header, _ = MZHeader.from_memory(mz_header(nblocks=1, lastsize=100, hdrsize=40), 0)
    with pytest.raises(MZGeometryError):
        MZGeometry.from_header(header)


def test_relocation_entry():
    entry, offset = RelocationEntry.from_memory(b"\x34\x12\x10\x00", 0)
    assert entry == RelocationEntry(offset=0x1234, segment=0x10)
    assert offset == 4

    with pytest.raises(MZParseError):
        RelocationEntry.from_memory(b"\x34\x12\x10", 0)


def test_read_relocations():
    relocs = [(0x1234, 0x10), (0x2, 0x0), (0xFFFF, 0xABCD)]
    f = io.BytesIO(mz_image(b"\x90", relocations=relocs))
    header = read_header(f)
    assert header.nreloc == 3

    entries = list(read_relocations(f, header))
    assert [(e.offset, e.segment) for e in entries] == relocs


def test_read_relocations_none():
    f = io.BytesIO(mz_image(b"\x90"))
    header = read_header(f)
    assert list(read_relocations(f, header)) == []


def test_read_relocations_truncated():
    # 36 byte file: the table at offset 32 has room for one entry.
    f = io.BytesIO(mz_image(b"\x01\x00\x02\x00", nreloc=3, relocpos=32))
    header = read_header(f)

    entries = []
    with pytest.raises(RelocationTableTruncatedError) as excinfo:
        for entry in read_relocations(f, header):
            entries.append(entry)

    assert entries == [RelocationEntry(offset=1, segment=2)]
    assert excinfo.value.entries_read == 1
    assert excinfo.value.entries_expected == 3


def test_read_code():
    f = io.BytesIO(mz_image(b"\xb4\x09\xcd\x21"))
    geometry = MZGeometry.from_header(read_header(f))
    assert read_code(f, geometry) == b"\xb4\x09\xcd\x21"


def test_read_code_short_file():
    """The header promises more bytes than the file has.
    Return what is there without padding."""
    f = io.BytesIO(mz_image(b"\xb4\x09\xcd\x21\x90\x90", nblocks=2, lastsize=100))
    geometry = MZGeometry.from_header(read_header(f))
    assert geometry.code_size == 580
    assert read_code(f, geometry) == b"\xb4\x09\xcd\x21\x90\x90"
