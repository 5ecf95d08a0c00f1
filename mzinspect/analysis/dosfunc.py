"""Names for DOS API services selected by the function number in AH before INT 21h."""

# Services recognized when a `MOV AH, imm8` directly precedes INT 21h.
DOS_FUNCTIONS: dict[int, str] = {
    0x00: "Program terminate",
    0x01: "Char input with echo",
    0x02: "Char output",
    0x09: "Print string",
    0x0A: "Buffered input",
    0x3C: "Create file",
    0x3D: "Open file",
    0x3E: "Close file",
    0x3F: "Read file",
    0x40: "Write file",
    0x41: "Delete file",
    0x4C: "Exit program",
}

# Superset used when guessing the purpose of any INT 21h/3Fh.
DOS_FUNCTIONS_EXTENDED: dict[int, str] = {
    0x00: "Program terminate",
    0x01: "Char input with echo",
    0x02: "Char output",
    0x09: "Print string",
    0x0A: "Buffered input",
    0x0C: "Get keystroke (no echo)",
    0x10: "Set cursor position",
    0x11: "Get current cursor position",
    0x12: "Get video mode",
    0x13: "Set video mode",
    0x16: "Read keystroke (buffered)",
    0x17: "Set default drive",
    0x1A: "Get current disk drive",
    0x1C: "Get disk free space",
    0x1E: "Set file attributes",
    0x1F: "Get file attributes",
    0x25: "Set interrupt vector",
    0x29: "Get system time",
    0x2C: "Get system date",
    0x2F: "Get drive parameter block",
    0x30: "Terminate process",
    0x3C: "Create file",
    0x3D: "Open file",
    0x3E: "Close file",
    0x3F: "Read file",
    0x40: "Write file",
    0x41: "Delete file",
    0x4C: "Exit program",
}


def dos_function_name(fn: int) -> str | None:
    return DOS_FUNCTIONS.get(fn)


def dos_function_purpose(fn: int) -> str:
    """Always returns a label, falling back to the raw function number."""
    return DOS_FUNCTIONS_EXTENDED.get(fn, f"Unknown function (0x{fn:x})")
