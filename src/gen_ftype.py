#!/usr/bin/env python3
"""Entry script for gen-ftype.

Generate a table to translate stat() S_IFMT values to 1-character file
types a la ``ls -l``, and print code using it in the chosen language.
"""

import argparse
import logging
import sys
from typing import Final, List, Optional

from color_logger import make_color_stream_handler
from emitters import Language, emit, show_languages
from file_type_masks import host_type_assignments, host_type_mask
from ftype_table import TranslationError, build_ftype_table, parse_translation
from mask_analyzer import MaskShapeError, analyze_mask

ROOT_LOGGER: Final = logging.getLogger()
LOGGER: Final = logging.getLogger(__name__)

EXIT_OK: Final = 0
EXIT_CONFIG_ERROR: Final = 2


def check_language(arg: str) -> Language:
    """Checks the arg names a language we can generate."""
    for language in Language:
        if language.value == arg:
            return language
    raise argparse.ArgumentTypeError(
        f"unknown programming language, '{arg}'.  {show_languages()}")


def check_translate(arg: str) -> str:
    """Checks the arg can be read as (from, to) character pairs."""
    try:
        parse_translation(arg)
    except TranslationError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    return arg


def make_parser():
    """Makes Parser ready to parse args passed to script."""

    parser = argparse.ArgumentParser(
        prog='gen-ftype',
        description='Generates `mode_to_ftype`, mapping a stat() mode to an `ls -l` file type.',
    )
    parser.add_argument(
        "--language", "-l", type=check_language,
        help="Language to generate code for: C, D or perl."
    )
    parser.add_argument(
        "--translate", type=check_translate, default="",
        help="Pairs of characters, e.g. `dD` makes directories `D` instead of `d`."
    )
    parser.add_argument("--verbose", "-v", action='store_true',
                        help="Enables DEBUG level tracing and INFO comments in the output")
    parser.add_argument("--quiet", "-q", action='store_true', help="Drops to WARNING level tracing")
    parser.add_argument("--list-languages", action='store_true',
                        help="Lists the known programming languages and exits.")
    parser.add_argument(
        "--output", "-o", default=None,
        help="File to write the generated code to.  Defaults to stdout."
    )

    return parser


def setup_loggers():
    """Setup loggers, all diagnostics to stderr."""
    for h in list(ROOT_LOGGER.handlers):
        ROOT_LOGGER.removeHandler(h)
    ROOT_LOGGER.addHandler(make_color_stream_handler(level=logging.DEBUG))
    ROOT_LOGGER.setLevel(logging.INFO)


def setup_log_levels(args: argparse.Namespace):
    """Setup logging levels per arguments."""
    log_level: Final = (
        logging.DEBUG if args.verbose
        else logging.WARNING if args.quiet
        else logging.INFO
    )
    ROOT_LOGGER.setLevel(log_level)


def run(args: argparse.Namespace) -> Optional[str]:
    """Analyze the host's S_IFMT and build the table.

    Returns the generated code, or None when S_IFMT is not a simple mask.
    """
    mask = host_type_mask()
    try:
        layout = analyze_mask(mask)
    except MaskShapeError as e:
        LOGGER.error("S_IFMT = %#x", e.mask)
        LOGGER.error("S_IFMT must be a simple mask.")
        LOGGER.error("That is, it must be a mask that has a single run of 1 bits.")
        return None

    table = build_ftype_table(
        layout, host_type_assignments(), parse_translation(args.translate))
    LOGGER.debug("ftype_table = q[%s], size %u, shift %u", table, len(table), layout.shift)
    if table.collisions:
        LOGGER.warning("%u collision(s) while building the table", len(table.collisions))

    return emit(args.language, table, layout, verbose=args.verbose)


def main(argv: Optional[List[str]] = None):
    """Main."""
    setup_loggers()
    parser = make_parser()
    args = parser.parse_args(argv)
    setup_log_levels(args)

    if args.list_languages:
        print(show_languages())
        sys.exit(EXIT_OK)
    if args.language is None:
        parser.error(f"no language specified.  {show_languages()}")

    code = run(args)
    if code is None:
        sys.exit(EXIT_CONFIG_ERROR)

    if args.output is None:
        sys.stdout.write(code)
    else:
        with open(args.output, "w", encoding="utf-8") as stream:
            stream.write(code)
    sys.exit(EXIT_OK)


if __name__ == '__main__':
    main()
