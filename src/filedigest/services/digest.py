# Drive a single file through access strategy selection and the digest engine.
from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import structlog

from ..config import CONFIG, HashConfig
from ..crypto.hasher import DigestEngine
from ..storage.file_io import access, file_size, open_file
from ..storage.strategy import Strategy
from ..utils.errors import EmptyFileError
from ..utils.text import format_digest_line

logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[int], None]


@dataclass(frozen=True)
class FileDigest:
    path: str
    size: int
    digest: bytes
    strategy: Strategy
    fell_back: bool = False
    algorithm: str = DigestEngine.name

    @property
    def hexdigest(self) -> str:
        return self.digest.hex()

    def format_line(self) -> str:
        return format_digest_line(self.path, self.hexdigest, algorithm=self.algorithm)


def digest_file(
    path: Path | str,
    *,
    strategy: Strategy = Strategy.AUTO,
    config: HashConfig = CONFIG,
    progress: Optional[ProgressCallback] = None,
) -> FileDigest:
    """Compute the SHA-256 of the file at ``path``.

    Zero-length files raise :class:`EmptyFileError` unless ``config.allow_empty``
    is set. Every resource acquired here is released before returning or
    raising: the byte source first, then the file handle.
    """
    started = time.perf_counter()
    logger.debug("digest.start", path=str(path), requested=strategy.value)
    with open_file(path) as handle:
        size = file_size(handle)
        if size == 0:
            if not config.allow_empty:
                raise EmptyFileError(path)
            engine = DigestEngine()
            return _finish(path, size, engine, Strategy.BUFFERED, False, started)

        with access(handle, size, strategy, config) as source:
            logger.debug("digest.strategy", path=str(path), size=size, strategy=source.strategy.value)
            if source.fell_back:
                logger.info("digest.fallback", path=str(path), size=size)
            engine = DigestEngine()
            for chunk in source.chunks():
                engine.update(chunk)
                if progress is not None:
                    progress(len(chunk))
            return _finish(path, size, engine, source.strategy, source.fell_back, started)


def _finish(
    path: Path | str,
    size: int,
    engine: DigestEngine,
    strategy: Strategy,
    fell_back: bool,
    started: float,
) -> FileDigest:
    result = FileDigest(
        path=str(path),
        size=size,
        digest=engine.finish(),
        strategy=strategy,
        fell_back=fell_back,
    )
    logger.info(
        "digest.done",
        path=result.path,
        size=size,
        strategy=strategy.value,
        duration_ms=round((time.perf_counter() - started) * 1000, 3),
    )
    return result


__all__ = ["FileDigest", "ProgressCallback", "digest_file"]
