"""File type constants for `stat`, named after the C macros of the same name,
and the fixed order in which they are given a mnemonic.
"""

import stat
from typing import Final, NamedTuple, Optional, Tuple

from cachetools.func import lru_cache


class FileType(NamedTuple):
    """A file type we know a mnemonic for, whether or not the host defines it."""
    name: str
    mnemonic: str
    description: str


class TypeAssignment(NamedTuple):
    """A host-defined type constant and the mnemonic to put in its table slot."""
    name: str
    constant: int
    mnemonic: str

    def position(self, shift: int) -> int:
        return self.constant >> shift


# Earlier entries win a collision, so this order must not change.
FILE_TYPES: Final[Tuple[FileType, ...]] = (
    FileType("S_IFIFO",  'p', "pipe"),
    FileType("S_IFCHR",  'c', "character device"),
    FileType("S_IFDIR",  'd', "directory"),
    FileType("S_IFBLK",  'b', "block device"),
    FileType("S_IFREG",  '-', "regular"),
    FileType("S_IFLNK",  'l', "sym-link"),
    FileType("S_IFSOCK", 's', "socket"),
    FileType("S_IFDOOR", 'D', "door (Solaris)"),
    FileType("S_IFPORT", 'E', "event port (Solaris)"),
    FileType("S_IFWHT",  'w', "whiteout (BSD)"),
    FileType("S_IFNWK",  'n', "network special (HP-UX)"),
)

UNKNOWN: Final = '?'

# Widest mode word `stat.S_IFMT()` accepts on every platform.
_ALL_MODE_BITS: Final = 0o177777


def host_constant(name: str) -> Optional[int]:
    """Value of ``stat.<name>``, or None when the host does not define it.

    Python defines S_IFDOOR, S_IFPORT and S_IFWHT as 0 where the platform
    has no such type, so zero counts as undefined.
    """
    value = getattr(stat, name, None)
    if not isinstance(value, int) or value == 0:
        return None
    return value


@lru_cache(maxsize=None)
def host_type_mask() -> int:
    """The file type mask (C's ``S_IFMT``) of the host."""
    return stat.S_IFMT(_ALL_MODE_BITS)


@lru_cache(maxsize=None)
def host_type_assignments(
        file_types: Tuple[FileType, ...] = FILE_TYPES,
) -> Tuple[TypeAssignment, ...]:
    """The assignments for those of ``file_types`` the host defines, in order."""
    assignments = []
    for file_type in file_types:
        constant = host_constant(file_type.name)
        if constant is None:
            continue
        assignments.append(TypeAssignment(file_type.name, constant, file_type.mnemonic))
    return tuple(assignments)
