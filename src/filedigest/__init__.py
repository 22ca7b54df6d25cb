"""Adaptive SHA-256 file digests."""
from .config import CONFIG, HashConfig
from .crypto.hasher import DigestEngine, sha256_bytes
from .services.digest import FileDigest, digest_file
from .storage.strategy import Strategy, select_strategy
from .utils.errors import FileDigestError

__version__ = "0.1.0"

__all__ = [
    "CONFIG",
    "DigestEngine",
    "FileDigest",
    "FileDigestError",
    "HashConfig",
    "Strategy",
    "__version__",
    "digest_file",
    "select_strategy",
    "sha256_bytes",
]
