from mzinspect.analysis.dosfunc import (
    DOS_FUNCTIONS,
    DOS_FUNCTIONS_EXTENDED,
    dos_function_name,
    dos_function_purpose,
)


def test_extended_is_superset():
    for fn, name in DOS_FUNCTIONS.items():
        assert DOS_FUNCTIONS_EXTENDED[fn] == name

    extra = set(DOS_FUNCTIONS_EXTENDED) - set(DOS_FUNCTIONS)
    assert extra == {
        0x0C,
        0x10,
        0x11,
        0x12,
        0x13,
        0x16,
        0x17,
        0x1A,
        0x1C,
        0x1E,
        0x1F,
        0x25,
        0x29,
        0x2C,
        0x2F,
        0x30,
    }


def test_tables_are_ordered():
    assert list(DOS_FUNCTIONS) == sorted(DOS_FUNCTIONS)
    assert list(DOS_FUNCTIONS_EXTENDED) == sorted(DOS_FUNCTIONS_EXTENDED)


def test_names():
    assert dos_function_name(0x09) == "Print string"
    assert dos_function_name(0x3C) == "Create file"
    assert dos_function_name(0x3F) == "Read file"
    assert dos_function_name(0x4C) == "Exit program"

    # Only in the extended table
    assert dos_function_name(0x25) is None
    assert dos_function_name(0xFF) is None


def test_purpose():
    assert dos_function_purpose(0x25) == "Set interrupt vector"
    assert dos_function_purpose(0x40) == "Write file"
    assert dos_function_purpose(0x99) == "Unknown function (0x99)"
    assert dos_function_purpose(0x0B) == "Unknown function (0xb)"
