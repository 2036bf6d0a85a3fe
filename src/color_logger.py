"""Defines a ColourFormatter for diagnostics on stderr.

Generated code goes to stdout, so nothing here ever writes there.
"""
import logging
import sys
from typing import TextIO


class ColourFormatter(logging.Formatter):
    """Colours each record by level, plain text when ``colour`` is off."""

    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    yellow = "\x1b[33;20m"
    blue = "\x1b[34;20m"
    cyan = "\x1b[36;20m"
    reset = "\x1b[0m"
    format_template = '%(levelname)s: %(name)s: %(message)s'

    COLOURS: tuple[tuple[int, str], ...] = (
        (logging.DEBUG, blue),
        (logging.INFO, cyan),
        (logging.WARNING, yellow),
        (logging.ERROR, red),
        (logging.CRITICAL, bold_red),
    )

    def __init__(self, colour: bool = True):
        super().__init__()
        self._formatters: tuple[tuple[int, logging.Formatter], ...] = tuple(
            (lvl, logging.Formatter(
                prefix + self.format_template + self.reset if colour else self.format_template))
            for lvl, prefix in ColourFormatter.COLOURS
        )

    def __get_formatter(self, level: int) -> logging.Formatter:
        for lvl, formatter in self._formatters:
            if level <= lvl:
                return formatter
        return self._formatters[-1][1]

    def format(self, record):
        formatter: logging.Formatter = self.__get_formatter(record.levelno)
        return formatter.format(record)


def make_color_stream_handler(stream: TextIO | None = None, level=logging.DEBUG):
    """Makes a stream handler with color formatter, colour only on a terminal."""
    if stream is None:
        stream = sys.stderr
    isatty = getattr(stream, "isatty", None)
    h = logging.StreamHandler(stream)
    h.setLevel(level)
    h.setFormatter(ColourFormatter(colour=bool(isatty and isatty())))
    return h
