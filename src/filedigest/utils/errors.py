from __future__ import annotations

from pathlib import Path


class FileDigestError(Exception):
    """Base exception for filedigest"""


class UsageError(FileDigestError):
    """Raised when the command line is malformed"""


class _PathError(FileDigestError):
    """Failure tied to a specific input path"""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class OpenError(_PathError):
    """Raised when the input file cannot be opened for reading"""


class PathNotFound(OpenError):
    """Raised when the input path does not exist"""


class PermissionDenied(OpenError):
    """Raised when the input file is not readable by this process"""


class SizeError(_PathError):
    """Raised when the length of an open file cannot be determined"""


class EmptyFileError(_PathError):
    """Raised for zero-length input unless empty files are allowed"""

    def __init__(self, path: Path | str) -> None:
        super().__init__(path, "empty file")


class AllocationError(FileDigestError):
    """Raised when the read buffer cannot be obtained"""


class MappingError(_PathError):
    """Raised when a file cannot be memory-mapped; recovered by falling back"""


class ReadError(_PathError):
    """Raised when reading fails part way through a file"""


class DigestFinalizedError(FileDigestError):
    """Raised when a finished digest is updated or finished again"""


__all__ = [
    "FileDigestError",
    "UsageError",
    "OpenError",
    "PathNotFound",
    "PermissionDenied",
    "SizeError",
    "EmptyFileError",
    "AllocationError",
    "MappingError",
    "ReadError",
    "DigestFinalizedError",
]
