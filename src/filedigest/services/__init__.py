from .digest import FileDigest, ProgressCallback, digest_file

__all__ = ["FileDigest", "ProgressCallback", "digest_file"]
