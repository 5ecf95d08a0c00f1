class MZError(Exception):
    """Base class for everything that can go wrong while inspecting an executable."""


class MZOpenError(MZError, OSError):
    """The file does not exist or cannot be opened for reading."""


class MZSignatureMismatchError(MZError, ValueError):
    """The first two bytes of the file are not 'MZ'."""


class MZParseError(MZError, ValueError):
    """A fixed-layout structure is shorter than its layout requires."""


class HeaderTruncatedError(MZParseError):
    pass


class RelocationTableTruncatedError(MZParseError):
    """The relocation table ended before all entries announced by the
    header could be read. `entries_read` says how many were valid."""

    def __init__(self, msg: str, entries_read: int, entries_expected: int):
        super().__init__(msg)
        self.entries_read = entries_read
        self.entries_expected = entries_expected


class MZGeometryError(MZError, ValueError):
    """File size or code region derived from the header makes no sense."""
