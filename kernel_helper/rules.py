"""
Deterministic literal-wrapping rules.

This file exists to make the output format and defaults explicit.
"""

STRING_PREFIX = '"'
STRING_SUFFIX = ' \\n"\n'  # space, backslash, n, quote, real newline
BLANK_LINE = '" \\n"\n'

# C isspace() set; input is single-byte text
WHITESPACE = frozenset(" \t\n\v\f\r")

# newline must fall inside the buffer, so content is at most 127 characters;
# fgets plus its NUL in the C tool stops one character earlier, at 126
MAX_BUFFER_SIZE = 128

DEFAULT_KERNEL_FILE = "kernel.cl"
DEFAULT_OUTPUT_FILE = "example.txt"
IO_DIRECTORY = "../data/"

FALLBACK_ENCODING = "latin-1"
READ_CHUNK_SIZE = 4096
