# Convert a *.cl kernel file into string literals that can be pasted into a char[]

import argparse
import logging
import os
import sys

from .errors import KernelHelperError, KernelNotFoundError, OutputNotCreatableError
from .models import ConvertOptions
from .rules import (
    DEFAULT_KERNEL_FILE,
    DEFAULT_OUTPUT_FILE,
    FALLBACK_ENCODING,
    IO_DIRECTORY,
    MAX_BUFFER_SIZE,
)
from .transform import process_kernel

logger = logging.getLogger("kernel-helper")


def get_file_path(file_name, immediate_directory, data_dir=IO_DIRECTORY):
    """Path to ``file_name`` under the data directory, or as given in immediate-directory mode."""
    if immediate_directory:
        return file_name
    return os.path.join(data_dir, file_name)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="kernel_helper",
        description="Reformat a kernel file so it can be pasted into a C/C++ string constant.",
        epilog="example: kernel_helper -f kernel.cl -o out.txt -v",
    )
    parser.add_argument("-v", dest="verbose", action="store_true", help="Activate verbose mode")
    parser.add_argument("-b", dest="include_blank_lines", action="store_true", help="Enable output of blank lines")
    parser.add_argument("-f", dest="kernel_file", default=DEFAULT_KERNEL_FILE,
                        help=f"Kernel file for the program to process (default: {DEFAULT_KERNEL_FILE})")
    parser.add_argument("-o", dest="output_file", default=DEFAULT_OUTPUT_FILE,
                        help=f"Output file for the program (default: {DEFAULT_OUTPUT_FILE})")
    parser.add_argument("-a", dest="immediate_directory", action="store_true",
                        help=f"Use paths as given (instead of looking in {IO_DIRECTORY})")
    parser.add_argument("--max-line-length", type=int, default=MAX_BUFFER_SIZE,
                        help=f"Line buffer size including the newline, 0 for no limit (default: {MAX_BUFFER_SIZE})")
    parser.add_argument("--strict", dest="require_trailing_newline", action="store_true",
                        help="Fail if the last line is not terminated by a newline")
    return parser


def options_from_args(args):
    return ConvertOptions(
        verbose=args.verbose,
        include_blank_lines=args.include_blank_lines,
        immediate_directory=args.immediate_directory,
        max_line_length=args.max_line_length or None,
        require_trailing_newline=args.require_trailing_newline,
    )


def run(kernel_path, output_path, options, echo=None):
    try:
        kernel_in = open(kernel_path, "r", encoding=FALLBACK_ENCODING, newline="\n")
    except OSError as exc:
        raise KernelNotFoundError(kernel_path, exc.strerror) from exc

    with kernel_in:
        try:
            kernel_out = open(output_path, "w", encoding=FALLBACK_ENCODING, newline="\n")
        except OSError as exc:
            raise OutputNotCreatableError(output_path, exc.strerror) from exc

        with kernel_out:
            return process_kernel(kernel_in, kernel_out, options, echo=echo)


def main(argv=None):
    logging.basicConfig(level=logging.INFO)

    args = build_parser().parse_args(argv)
    if args.max_line_length < 0 or args.max_line_length == 1:
        logger.error("Fatal Error: --max-line-length must be 0 or at least 2")
        return 2

    options = options_from_args(args)
    in_path = get_file_path(args.kernel_file, options.immediate_directory)
    out_path = get_file_path(args.output_file, options.immediate_directory)

    try:
        report = run(in_path, out_path, options)
    except KernelHelperError as exc:
        logger.error("Fatal Error: %s", exc)
        return 1

    logger.info("wrote %d records from %d lines to %s", report.records_written, report.lines_read, out_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
