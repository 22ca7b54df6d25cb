"""Digest primitives."""
from .hasher import DigestEngine, sha256_bytes

__all__ = ["DigestEngine", "sha256_bytes"]
