"""
Line-by-line conversion of a kernel source into paste-able string literals.

Every content line becomes one element of a multi-line C string constant:

    __kernel void example(        ->  "__kernel void example( \\n"
        int i = get_global_id(0); ->  "    int i = get_global_id(0); \\n"

Blank lines are dropped unless ``include_blank_lines`` is set, in which case
they become the fixed empty literal ``" \\n"``. Quotes and backslashes inside
a line are copied as they are.
"""

from __future__ import annotations

import io
import logging
import sys
from typing import IO, Iterator, Optional, Tuple

from .errors import LineTooLongError, MissingTerminatorError
from .models import ConversionReport, ConvertOptions, LineKind
from .rules import BLANK_LINE, MAX_BUFFER_SIZE, STRING_PREFIX, STRING_SUFFIX, WHITESPACE

logger = logging.getLogger(__name__)


def measure_line(raw: str, max_length: Optional[int] = MAX_BUFFER_SIZE, line_number: int = 1) -> Tuple[int, bool]:
    """
    Return ``(length, terminated)`` for a raw line.

    The length is the index of the first newline inside the first
    ``max_length`` characters. A line that fills the buffer without a newline
    raises LineTooLongError; a shorter line without one was cut by the end of
    the stream and is reported as unterminated.
    """
    window = raw if max_length is None else raw[:max_length]
    index = window.find("\n")
    if index >= 0:
        return index, True

    if max_length is not None and len(raw) >= max_length:
        raise LineTooLongError(line_number, len(raw), max_length)

    return len(raw), False


def is_blank_line(text: str) -> bool:
    return all(ch in WHITESPACE for ch in text)


def classify_line(text: str) -> LineKind:
    return LineKind.BLANK if is_blank_line(text) else LineKind.CONTENT


def process_line(text: str) -> str:
    return STRING_PREFIX + text + STRING_SUFFIX


def render_line(text: str, options: Optional[ConvertOptions] = None) -> Optional[str]:
    """Output record for a line without its newline, or None when suppressed."""
    options = options or ConvertOptions()

    if classify_line(text) is LineKind.BLANK:
        return BLANK_LINE if options.include_blank_lines else None

    return process_line(text)


def transform_line(raw: str, options: Optional[ConvertOptions] = None, line_number: int = 1) -> Optional[str]:
    options = options or ConvertOptions()
    length, _ = measure_line(raw, options.max_line_length, line_number)
    return render_line(raw[:length], options)


def _read_lines(kernel: IO[str], max_length: Optional[int]) -> Iterator[str]:
    # readline(n) stops at n characters, like fgets with a fixed buffer
    limit = -1 if max_length is None else max_length
    while True:
        raw = kernel.readline(limit)
        if not raw:
            return
        yield raw


def process_kernel(
    kernel: IO[str],
    kernel_out: IO[str],
    options: Optional[ConvertOptions] = None,
    echo: Optional[IO[str]] = None,
) -> ConversionReport:
    """
    Convert every line of ``kernel`` and write the records to ``kernel_out``.

    Streams are neither opened nor closed here. On error the records already
    written stay in ``kernel_out`` and the exception propagates.
    """
    options = options or ConvertOptions()
    if options.verbose and echo is None:
        echo = sys.stdout

    report = ConversionReport()

    for line_number, raw in enumerate(_read_lines(kernel, options.max_line_length), start=1):
        length, terminated = measure_line(raw, options.max_line_length, line_number)
        report.lines_read += 1
        report.trailing_newline = terminated

        if not terminated and options.require_trailing_newline:
            raise MissingTerminatorError(line_number)

        text = raw[:length]
        if classify_line(text) is LineKind.BLANK:
            report.blank_lines += 1
            if not options.include_blank_lines:
                continue
            record = BLANK_LINE
            report.blank_lines_emitted += 1
        else:
            report.content_lines += 1
            record = process_line(text)

        if options.verbose:
            echo.write(record)
        kernel_out.write(record)
        report.records_written += 1

    logger.debug(
        "converted %d lines (%d content, %d blank), wrote %d records",
        report.lines_read,
        report.content_lines,
        report.blank_lines,
        report.records_written,
    )
    return report


def convert_text(text: str, options: Optional[ConvertOptions] = None) -> Tuple[str, ConversionReport]:
    # newline="\n" keeps "\r" inside the line body, as a byte-oriented reader would
    inp = io.StringIO(text, newline="\n")
    outp = io.StringIO(newline="\n")
    report = process_kernel(inp, outp, options)
    return outp.getvalue(), report
