from __future__ import annotations

from typing import Optional


class KernelHelperError(ValueError):
    """Base class for every failure that ends a run."""


class LineTooLongError(KernelHelperError):
    def __init__(self, line_number: int, length: int, max_length: int):
        self.line_number = line_number
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"line {line_number}: maximum string length was exceeded "
            f"({length} characters read, limit {max_length - 1})"
        )


class MissingTerminatorError(KernelHelperError):
    def __init__(self, line_number: int):
        self.line_number = line_number
        super().__init__(f"line {line_number}: last line is not terminated by a newline")


class KernelNotFoundError(KernelHelperError):
    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        msg = f"Kernel was not found: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class OutputNotCreatableError(KernelHelperError):
    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        msg = f"Output file was not found or created: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class AllocationError(KernelHelperError):
    pass
