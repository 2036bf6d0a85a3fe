"""Generate source code for ``mode_to_ftype`` in the supported languages.

Each generator only formats text from a finished table and mask layout.
"""
from enum import Enum
from typing import Callable, Dict, Final, List

from ftype_table import FtypeTable
from mask_analyzer import MaskLayout


class Language(Enum):
    C = "C"
    D = "D"
    PERL = "perl"

    def __str__(self) -> str:
        return self.value


def show_languages() -> str:
    return "Known programming languages are: " + ", ".join(str(lang) for lang in Language)


def _escape(text: str, extra: str = "") -> str:
    """Escape ``text`` for a double quoted string literal."""
    result = []
    for c in text:
        if c == '\\' or c == '"' or c in extra:
            result.append('\\')
        result.append(c)
    return "".join(result)


def _info_lines(comment: str, table: FtypeTable, layout: MaskLayout) -> List[str]:
    return [
        f"{comment} INFO: ftype_table_size = {len(table)}",
        f"{comment} INFO: ftype_table = q[{table}]",
        f"{comment} INFO: S_IFMT = {layout.mask:#x}",
        f"{comment} INFO: ifmt_shift = {layout.shift}",
        "",
    ]


def generate_c(table: FtypeTable, layout: MaskLayout, verbose: bool = False) -> str:
    """C: a table, a function and an equivalent macro."""
    lines = _info_lines("//", table, layout) if verbose else []
    text = _escape(str(table))
    lines += [
        f'static const char *ftype_table = "{text}";',
        "",
        "static inline unsigned int",
        "extract_bitfield(unsigned int wrd, unsigned int msk, unsigned int shft)",
        "{",
        "    return ((wrd & msk) >> shft);",
        "}",
        "",
        "static inline char",
        "mode_to_ftype(unsigned int m)",
        "{",
        f"    unsigned int pos = extract_bitfield(m, {layout.mask:#x}, {layout.shift});",
        "    return (ftype_table[pos]);",
        "}",
        "",
        f'#define mode_to_filetype(m) ("{text}"[((m) & {layout.mask:#x}) >> {layout.shift}])',
    ]
    return "\n".join(lines) + "\n"


def generate_d(table: FtypeTable, layout: MaskLayout, verbose: bool = False) -> str:
    """D: an immutable string and a function."""
    lines = _info_lines("//", table, layout) if verbose else []
    lines += [
        f'immutable string ftype_table = "{_escape(str(table))}";',
        "",
        "pragma(inline, true)",
        "uint extract_bitfield(uint wrd, uint msk, uint shft)",
        "{",
        "    return (wrd & msk) >> shft;",
        "}",
        "",
        "char mode_to_ftype(uint m)",
        "{",
        f"    return ftype_table[extract_bitfield(m, {layout.mask:#x}, {layout.shift})];",
        "}",
    ]
    return "\n".join(lines) + "\n"


def generate_perl(table: FtypeTable, layout: MaskLayout, verbose: bool = False) -> str:
    """Perl: a one line ``sub``."""
    lines = _info_lines("#", table, layout) if verbose else []
    lines.append(
        f'sub mode_to_ftype {{ substr("{_escape(str(table), extra="$@")}", '
        f'($_[0] & {layout.mask:#x}) >> {layout.shift}, 1); }}'
    )
    return "\n".join(lines) + "\n"


EMITTERS: Final[Dict[Language, Callable[..., str]]] = {
    Language.C: generate_c,
    Language.D: generate_d,
    Language.PERL: generate_perl,
}


def emit(language: Language, table: FtypeTable, layout: MaskLayout, verbose: bool = False) -> str:
    return EMITTERS[language](table, layout, verbose=verbose)
