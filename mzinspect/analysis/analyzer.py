import logging
from typing import BinaryIO

from mzinspect.formats.exceptions import (
    MZSignatureMismatchError,
    RelocationTableTruncatedError,
)
from mzinspect.formats.mz import (
    DEFAULT_CODE_WINDOW,
    MZGeometry,
    MZHeader,
    read_code,
    read_header,
    read_relocations,
)
from .dosfunc import dos_function_name, dos_function_purpose
from .interrupts import (
    ANY_INTERRUPT_PASS,
    DOS_CALL_PASS,
    PURPOSE_INTERRUPTS,
    find_interrupts,
    load_ah_function,
    preceding_function,
)
from .report import ReportWriter, hex_bytes, tagged_hex_bytes

logger = logging.getLogger(__name__)


def report_header(header: MZHeader, writer: ReportWriter):
    writer.heading("Header Info:")
    writer.line(f"Signature: 0x{header.signature:x}")
    writer.line(f"Bytes on last page: {header.lastsize}")
    writer.line(f"Total pages: {header.nblocks}")
    writer.line(f"Relocations: {header.nreloc}")
    writer.line(f"Header size (paragraphs): {header.hdrsize}")
    writer.line(f"Min alloc: {header.minalloc} paragraphs")
    writer.line(f"Max alloc: {header.maxalloc} paragraphs")
    writer.line(f"Initial SS: 0x{header.ss:x}")
    writer.line(f"Initial SP: 0x{header.sp:x}")
    writer.line(f"Checksum: {header.checksum}")
    writer.line(f"Initial IP: {header.ip}")
    writer.line(f"Initial CS: {header.cs}")
    writer.line(f"Relocation table offset: {header.relocpos}")
    writer.line(f"Overlay number: 0x{header.noverlay:x}")
    writer.line()


def report_relocations(f: BinaryIO, header: MZHeader, writer: ReportWriter):
    if header.nreloc == 0:
        return

    writer.heading("Relocation Table:", width=18)
    try:
        for i, entry in enumerate(read_relocations(f, header)):
            writer.line(
                f"Entry #{i} => Offset: 0x{entry.offset:x}, Segment: 0x{entry.segment:x}"
            )
    except RelocationTableTruncatedError as e:
        # The rest of the analysis does not depend on the relocation table.
        logger.warning("%s", e)
        writer.line(str(e))

    writer.line()


def report_dos_calls(code: bytes, code_start: int, writer: ReportWriter):
    writer.heading("Code Analysis (looking for INT 21h calls):")

    for match in find_interrupts(code, DOS_CALL_PASS):
        writer.line(f"Found INT 21h at offset 0x{code_start + match.index:x}")
        writer.line(f"  Surrounding bytes: {hex_bytes(match.context)}")

        fn = load_ah_function(code, match.index)
        if fn is None:
            continue

        name = dos_function_name(fn)
        if name is None:
            logger.debug(
                "No name for DOS function 0x%x at offset 0x%x",
                fn,
                code_start + match.index,
            )
            continue

        writer.line(f"  MOV AH, 0x{fn:x} => {name}")
        writer.line()


def report_all_interrupts(code: bytes, code_start: int, writer: ReportWriter):
    writer.heading(
        "Extra: Scanning for DOS interrupt functions in raw code:", width=50
    )

    for match in find_interrupts(code, ANY_INTERRUPT_PASS):
        writer.line(
            f"Found INT {match.interrupt:x}h at offset 0x{code_start + match.index:x}"
        )
        writer.line(
            f"  Context: {tagged_hex_bytes(match.context, match.interrupt, writer)}"
        )

        if match.interrupt in PURPOSE_INTERRUPTS:
            fn = preceding_function(code, match.index)
            if fn is None:
                logger.debug(
                    "INT %xh at the start of the code window has no function byte",
                    match.interrupt,
                )
            else:
                writer.line(f"  Purpose: {dos_function_purpose(fn)}")

        writer.line()


def analyze_mz_executable(
    f: BinaryIO,
    writer: ReportWriter,
    code_window: int = DEFAULT_CODE_WINDOW,
):
    """Write the header, relocation table and interrupt scan of the MZ executable
    in the given binary stream. Raises an MZError subclass if the header is truncated
    or describes an impossible layout."""
    header = read_header(f)
    if not header.has_signature:
        raise MZSignatureMismatchError(
            "This file does not appear to be a valid MZ executable."
        )

    writer.line()
    writer.line("=== MZ EXECUTABLE ANALYSIS ===")
    writer.line()

    report_header(header, writer)

    writer.line(f"Estimated file size: {header.file_size} bytes")
    writer.line()

    report_relocations(f, header, writer)

    geometry = MZGeometry.from_header(header, code_window=code_window)
    logger.debug(
        "Code window: %d bytes at offset 0x%x", geometry.code_size, geometry.code_start
    )
    code = read_code(f, geometry)

    report_dos_calls(code, geometry.code_start, writer)
    report_all_interrupts(code, geometry.code_start, writer)
