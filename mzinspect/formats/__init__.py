from .detect import is_mz_executable, open_executable
from .exceptions import (
    HeaderTruncatedError,
    MZError,
    MZGeometryError,
    MZOpenError,
    MZParseError,
    MZSignatureMismatchError,
    RelocationTableTruncatedError,
)
from .mz import (
    DEFAULT_CODE_WINDOW,
    MZGeometry,
    MZHeader,
    RelocationEntry,
    read_code,
    read_header,
    read_relocations,
)
