"""File access strategies."""
from .file_io import BufferedSource, ByteSource, MappedSource, access, file_size, open_file
from .strategy import Strategy, resolve_strategy, select_strategy

__all__ = [
    "BufferedSource",
    "ByteSource",
    "MappedSource",
    "Strategy",
    "access",
    "file_size",
    "open_file",
    "resolve_strategy",
    "select_strategy",
]
