"""
Whole-file loading for runtime use.

Responsibilities:
- read a kernel stream verbatim into one string (no wrapping, no newline stripping)
- open a kernel file by path and size the first read from the filesystem
- decode uploaded bytes for the HTTP surface
"""

from __future__ import annotations

import io
import logging
import os
from typing import IO, Optional, Tuple

from charset_normalizer import from_bytes

from .errors import AllocationError, KernelNotFoundError
from .rules import FALLBACK_ENCODING, READ_CHUNK_SIZE

logger = logging.getLogger(__name__)


def load_kernel(kernel: IO[str], kernel_size: Optional[int] = None) -> str:
    """
    Return the remaining contents of ``kernel`` as one string.

    ``kernel_size`` is only a hint for the read size. A short hint is safe:
    reading continues until the stream is exhausted.
    """
    chunk_size = kernel_size if kernel_size and kernel_size > 0 else READ_CHUNK_SIZE

    buf = io.StringIO()
    try:
        while True:
            chunk = kernel.read(chunk_size)
            if not chunk:
                break
            buf.write(chunk)
        return buf.getvalue()
    except MemoryError as exc:
        raise AllocationError(f"could not allocate kernel buffer after {buf.tell()} characters") from exc


def load_kernel_file(path: str, encoding: str = FALLBACK_ENCODING) -> str:
    try:
        kernel = open(path, "r", encoding=encoding, newline="\n")
    except OSError as exc:
        raise KernelNotFoundError(path, exc.strerror) from exc

    with kernel:
        size = os.fstat(kernel.fileno()).st_size
        source = load_kernel(kernel, size)

    logger.debug("loaded %s (%d bytes)", path, size)
    return source


def decode_source(raw: bytes) -> Tuple[str, str]:
    """
    Decode kernel bytes, returning ``(text, encoding_used)``.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is dropped so it does not end up inside the first literal.
    - If the guess does not decode, fall back to latin-1, which never fails.
    """
    if not raw:
        return "", "utf-8"

    match = from_bytes(raw).best()
    decode_used = match.encoding if match is not None else "utf-8"

    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    try:
        return raw.decode(decode_used), decode_used
    except (UnicodeDecodeError, LookupError):
        logger.warning("could not decode kernel as %s, falling back to %s", decode_used, FALLBACK_ENCODING)
        return raw.decode(FALLBACK_ENCODING), FALLBACK_ENCODING
