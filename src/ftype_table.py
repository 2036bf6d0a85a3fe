"""Builds the table that maps a decoded file type field to a one character
mnemonic, a la ``ls -l``.
"""
import logging
from typing import Final, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from file_type_masks import UNKNOWN, TypeAssignment
from mask_analyzer import MaskLayout


LOGGER: Final = logging.getLogger(__name__)

TranslationRule = Tuple[str, str]


class TranslationError(ValueError):
    """The translate string can not be read as (from, to) pairs."""


class Collision(NamedTuple):
    position: int
    incoming: str
    existing: str


class FtypeTable(List[str]):
    """One character per decoded type field value, ``?`` where unknown."""

    collisions: List[Collision]

    def __init__(self, chars: Iterable[str] = ()):
        super().__init__(chars)
        self.collisions = []

    def __str__(self) -> str:
        return "".join(self)

    def copy(self) -> "FtypeTable":
        result = FtypeTable(self)
        result.collisions = list(self.collisions)
        return result


def new_table(size: int) -> FtypeTable:
    """A table of ``size`` unknown file types."""
    return FtypeTable(UNKNOWN * size)


def add_ftype(table: FtypeTable, pos: int, chr: str) -> bool:  # pylint: disable=redefined-builtin
    """Put ``chr`` at ``pos`` unless something is already there.

    A collision is logged and recorded on the table, the first mnemonic stays.
    """
    if not 0 <= pos < len(table):
        LOGGER.error("position %u is outside the table (size %u), '%c' dropped",
                     pos, len(table), chr)
        return False
    old_chr = table[pos]
    if old_chr != UNKNOWN:
        LOGGER.error("collision, position %u, '%c' vs '%c'", pos, chr, old_chr)
        table.collisions.append(Collision(pos, chr, old_chr))
        return False
    table[pos] = chr
    return True


def parse_translation(pairs: str) -> List[TranslationRule]:
    """Read ``pairs`` two characters at a time, e.g. ``"dD"`` -> ``[("d", "D")]``."""
    if len(pairs) % 2 != 0:
        raise TranslationError(
            f"translate string must have an even number of characters, got {pairs!r}")
    return [(pairs[i], pairs[i + 1]) for i in range(0, len(pairs), 2)]


def apply_translation(table: FtypeTable, rules: Sequence[TranslationRule]) -> None:
    """Rewrite every slot through ``rules``, in order.

    Each rule sees the slot as left by the rules before it, so ``a->b``
    followed by ``b->c`` turns an ``a`` into a ``c``.
    """
    for i, _ in enumerate(table):
        for from_chr, to_chr in rules:
            if table[i] == from_chr:
                table[i] = to_chr


def build_ftype_table(
        layout: MaskLayout,
        assignments: Iterable[TypeAssignment],
        translations: Optional[Sequence[TranslationRule]] = None,
) -> FtypeTable:
    """Build the table of binary file type to single-letter mnemonic.

    Start off with all unknown file types, fill in ``assignments`` in the
    order given, then post-process with any ``translations``.
    """
    table = new_table(layout.table_size)
    for assignment in assignments:
        pos = assignment.position(layout.shift)
        LOGGER.debug("%s = %#x -> position %u '%c'",
                     assignment.name, assignment.constant, pos, assignment.mnemonic)
        add_ftype(table, pos, assignment.mnemonic)

    if translations:
        apply_translation(table, translations)
    return table
