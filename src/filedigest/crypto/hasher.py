# Incremental SHA-256 on top of the OpenSSL-backed cryptography primitives.
from __future__ import annotations

from cryptography.exceptions import AlreadyFinalized
from cryptography.hazmat.primitives import hashes

from ..utils.errors import DigestFinalizedError


class DigestEngine:
    """Single-use SHA-256 accumulator.

    ``update`` accepts any bytes-like chunk, including a ``memoryview`` over a
    mapped file. The result does not depend on how the input is split into
    chunks. After ``finish`` the engine is spent.
    """

    name = "SHA256"
    digest_size = 32

    def __init__(self) -> None:
        self._ctx: hashes.Hash | None = hashes.Hash(hashes.SHA256())

    @property
    def finished(self) -> bool:
        return self._ctx is None

    def update(self, chunk: bytes | bytearray | memoryview) -> DigestEngine:
        if self._ctx is None:
            raise DigestFinalizedError("digest already finished; update is not allowed")
        try:
            self._ctx.update(chunk)
        except AlreadyFinalized as exc:
            raise DigestFinalizedError(str(exc)) from exc
        return self

    def finish(self) -> bytes:
        if self._ctx is None:
            raise DigestFinalizedError("digest already finished")
        ctx, self._ctx = self._ctx, None
        return ctx.finalize()


def sha256_bytes(data: bytes | bytearray | memoryview) -> bytes:
    return DigestEngine().update(data).finish()


__all__ = ["DigestEngine", "sha256_bytes"]
