from __future__ import annotations

import abc
import contextlib
import mmap
import os
from io import FileIO
from pathlib import Path
from typing import Iterator

import structlog

from ..config import CONFIG, HashConfig
from ..utils.errors import (
    AllocationError,
    MappingError,
    OpenError,
    PathNotFound,
    PermissionDenied,
    ReadError,
    SizeError,
)
from .strategy import Strategy, resolve_strategy

logger = structlog.get_logger(__name__)


@contextlib.contextmanager
def open_file(path: Path | str) -> Iterator[FileIO]:
    """Open ``path`` read-only and unbuffered; the handle is closed on exit."""
    try:
        handle = FileIO(path, "rb")
    except FileNotFoundError as exc:
        raise PathNotFound(path, exc.strerror or "no such file or directory") from exc
    except PermissionError as exc:
        raise PermissionDenied(path, exc.strerror or "permission denied") from exc
    except OSError as exc:
        raise OpenError(path, exc.strerror or str(exc)) from exc
    with handle:
        yield handle


def file_size(handle: FileIO) -> int:
    try:
        return os.fstat(handle.fileno()).st_size
    except OSError as exc:
        raise SizeError(_path_of(handle), exc.strerror or str(exc)) from exc


def _path_of(handle: FileIO) -> str:
    name = handle.name
    return os.fsdecode(name) if isinstance(name, (str, bytes, os.PathLike)) else f"<fd {name}>"


def _map_readonly(fd: int, size: int) -> mmap.mmap:
    return mmap.mmap(fd, size, access=mmap.ACCESS_READ)


def _allocate_buffer(size: int, alignment: int) -> mmap.mmap:
    # Anonymous maps start on a page boundary.
    if mmap.PAGESIZE % alignment:
        raise AllocationError(f"page size {mmap.PAGESIZE} is not a multiple of alignment {alignment}")
    try:
        return mmap.mmap(-1, size)
    except (OSError, MemoryError) as exc:
        raise AllocationError(f"cannot allocate {size} byte read buffer: {exc}") from exc


class ByteSource(abc.ABC):
    """Chunked view over an open file.

    A source owns at most one mapped region or scratch buffer. Chunks are
    ``memoryview`` objects that stay valid only until the next chunk is requested.
    """

    strategy: Strategy

    def __init__(self, handle: FileIO, size: int) -> None:
        self.handle = handle
        self.size = size
        self.path = _path_of(handle)
        self.fell_back = False

    @abc.abstractmethod
    def chunks(self) -> Iterator[memoryview]:
        raise NotImplementedError

    @abc.abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> ByteSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class MappedSource(ByteSource):
    strategy = Strategy.MAPPED

    def __init__(self, handle: FileIO, size: int) -> None:
        super().__init__(handle, size)
        try:
            self._map: mmap.mmap | None = _map_readonly(handle.fileno(), size)
        except (OSError, ValueError, OverflowError, MemoryError) as exc:
            raise MappingError(self.path, str(exc)) from exc
        if hasattr(self._map, "madvise") and hasattr(mmap, "MADV_SEQUENTIAL"):
            try:
                self._map.madvise(mmap.MADV_SEQUENTIAL)
            except OSError as exc:
                logger.debug("file_io.madvise_failed", path=self.path, error=str(exc))
        self._view: memoryview | None = memoryview(self._map)

    def chunks(self) -> Iterator[memoryview]:
        if self._view is None:
            raise ValueError("source is closed")
        yield self._view

    def close(self) -> None:
        if self._view is not None:
            self._view.release()
            self._view = None
        if self._map is not None:
            self._map.close()
            self._map = None


class BufferedSource(ByteSource):
    strategy = Strategy.BUFFERED

    def __init__(self, handle: FileIO, size: int, config: HashConfig = CONFIG) -> None:
        super().__init__(handle, size)
        self._buffer: mmap.mmap | None = _allocate_buffer(config.buffer_size, config.alignment)
        self._view: memoryview | None = memoryview(self._buffer)
        if hasattr(os, "posix_fadvise"):
            try:
                os.posix_fadvise(handle.fileno(), 0, 0, os.POSIX_FADV_SEQUENTIAL)
            except OSError as exc:
                logger.debug("file_io.fadvise_failed", path=self.path, error=str(exc))

    def chunks(self) -> Iterator[memoryview]:
        view = self._view
        if view is None:
            raise ValueError("source is closed")
        while True:
            try:
                count = self.handle.readinto(view)
            except OSError as exc:
                raise ReadError(self.path, exc.strerror or str(exc)) from exc
            if not count:
                return
            with view[:count] as chunk:
                yield chunk

    def close(self) -> None:
        if self._view is not None:
            self._view.release()
            self._view = None
        if self._buffer is not None:
            self._buffer.close()
            self._buffer = None


def access(
    handle: FileIO,
    size: int,
    strategy: Strategy = Strategy.AUTO,
    config: HashConfig = CONFIG,
) -> ByteSource:
    """Return a byte source for ``handle`` using ``strategy``.

    A mapped source that cannot be created degrades to a buffered one; the
    returned source then reports ``fell_back``.
    """
    chosen = resolve_strategy(strategy, size, config.mmap_threshold)
    if chosen is Strategy.MAPPED:
        try:
            return MappedSource(handle, size)
        except MappingError as exc:
            logger.warning("file_io.mmap_fallback", path=str(exc.path), error=exc.reason)
            source = BufferedSource(handle, size, config)
            source.fell_back = True
            return source
    return BufferedSource(handle, size, config)


__all__ = [
    "BufferedSource",
    "ByteSource",
    "MappedSource",
    "access",
    "file_size",
    "open_file",
]
