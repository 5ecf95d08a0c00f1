import sys
from typing import Iterable, TextIO

import colorama

from .interrupts import INT_OPCODE


class ReportWriter:
    """Line-oriented text sink for the analysis report.
    Writes to stdout unless another stream (e.g. io.StringIO) is given."""

    def __init__(self, stream: TextIO | None = None, plain: bool = True):
        self.stream = stream if stream is not None else sys.stdout
        self.plain = plain

    def line(self, text: str = ""):
        print(text, file=self.stream)

    def heading(self, title: str, underline: str = "-", width: int | None = None):
        self.line(title)
        self.line(underline * (width if width is not None else len(title)))

    def highlight(self, text: str) -> str:
        if self.plain:
            return text

        return f"{colorama.Fore.YELLOW}{text}{colorama.Style.RESET_ALL}"


def hex_bytes(context: Iterable[tuple[int, int]]) -> str:
    """Plain zero-padded hex for each byte, separated by spaces."""
    return " ".join(f"{value:02x}" for _, value in context)


def tagged_hex_bytes(
    context: Iterable[tuple[int, int]], interrupt: int, writer: ReportWriter
) -> str:
    """Like hex_bytes, but the INT opcode and its interrupt number are bracketed."""
    tokens = []
    for rel, value in context:
        if rel == 0:
            tokens.append(writer.highlight(f"[{INT_OPCODE:X}]"))
        elif rel == 1:
            tokens.append(writer.highlight(f"[{interrupt:x}]"))
        else:
            tokens.append(f"{value:02x}")

    return " ".join(tokens)
