"""Utility exports."""
from .errors import (
    AllocationError,
    DigestFinalizedError,
    EmptyFileError,
    FileDigestError,
    MappingError,
    OpenError,
    PathNotFound,
    PermissionDenied,
    ReadError,
    SizeError,
    UsageError,
)
from .text import format_digest_line

__all__ = [
    "AllocationError",
    "DigestFinalizedError",
    "EmptyFileError",
    "FileDigestError",
    "MappingError",
    "OpenError",
    "PathNotFound",
    "PermissionDenied",
    "ReadError",
    "SizeError",
    "UsageError",
    "format_digest_line",
]
