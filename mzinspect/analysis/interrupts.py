"""Byte-pattern search for software interrupt instructions (INT imm8, opcode CD)
in a window of x86 real mode code. No instruction decoding is attempted:
a CD byte inside an operand will be reported too."""

from dataclasses import dataclass
from typing import Iterator

INT_OPCODE = 0xCD
MOV_AH_IMM8 = 0xB4
DOS_API_INTERRUPT = 0x21

# Interrupt numbers for which we guess the DOS service from the byte before CD.
PURPOSE_INTERRUPTS = frozenset((0x21, 0x3F))


@dataclass(frozen=True)
class ScanPass:
    # Match only INT instructions with this number. None matches all of them.
    interrupt: int | None
    # Number of bytes shown before and after the CD opcode.
    context_before: int
    context_after: int


# INT 21h only, followed by a 20 byte window.
DOS_CALL_PASS = ScanPass(interrupt=DOS_API_INTERRUPT, context_before=10, context_after=9)

# Any INT instruction, with a 21 byte window centered on the opcode.
ANY_INTERRUPT_PASS = ScanPass(interrupt=None, context_before=10, context_after=10)


@dataclass(frozen=True)
class InterruptMatch:
    # Position of the CD opcode in the code buffer.
    index: int
    interrupt: int
    # (position relative to the opcode, byte value) for each in-bounds byte.
    context: tuple[tuple[int, int], ...]


def byte_at(code: bytes, index: int) -> int | None:
    """Return the byte at the given index or None if out of bounds.
    Negative indices do not wrap around."""
    if 0 <= index < len(code):
        return code[index]

    return None


def context_window(
    code: bytes, index: int, before: int, after: int
) -> tuple[tuple[int, int], ...]:
    """Bytes from index - before to index + after inclusive, clipped to the buffer."""
    return tuple(
        (rel, value)
        for rel in range(-before, after + 1)
        if (value := byte_at(code, index + rel)) is not None
    )


def find_interrupts(code: bytes, scan_pass: ScanPass) -> Iterator[InterruptMatch]:
    """Scan left to right for CD xx. The last byte of the buffer can never
    start a match because its interrupt number would be missing."""
    for i in range(len(code) - 1):
        if code[i] != INT_OPCODE:
            continue

        interrupt = code[i + 1]
        if scan_pass.interrupt is not None and interrupt != scan_pass.interrupt:
            continue

        yield InterruptMatch(
            index=i,
            interrupt=interrupt,
            context=context_window(
                code, i, scan_pass.context_before, scan_pass.context_after
            ),
        )


def load_ah_function(code: bytes, index: int) -> int | None:
    """If the INT at index is directly preceded by MOV AH, imm8 (B4 xx),
    return the immediate value."""
    if byte_at(code, index - 2) != MOV_AH_IMM8:
        return None

    return byte_at(code, index - 1)


def preceding_function(code: bytes, index: int) -> int | None:
    """The byte just before the INT opcode, presumed to be the AH value.
    None if the INT is at the very start of the buffer."""
    return byte_at(code, index - 1)
