"""
Scan errors — Fatal and per-file failure types

Fatal (propagate out of the scan):
- DirectoryReadError: a directory's entries cannot be listed
- FileReadError: a file cannot be read (fatal only with strict_reads)

Per-file (caught at the file boundary, reported as a diagnostic):
- ParseFailure: the file is not syntactically valid

Errors carry their arguments in `args` so they survive pickling across
worker processes.
"""

from typing import Optional


class ScanError(Exception):
    """Base class for scan failures."""


class DirectoryReadError(ScanError):
    """Directory entries could not be enumerated."""

    def __init__(self, path: str, reason: str):
        super().__init__(path, reason)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return f"Failed to read directory {self.path}: {self.reason}"


class FileReadError(ScanError):
    """A source file could not be read or decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(path, reason)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return f"Failed to read file {self.path}: {self.reason}"


class ParseFailure(ScanError):
    """Source text is not syntactically valid."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message, line, column)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} at line {self.line}, column {self.column}"
