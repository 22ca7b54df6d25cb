"""Output formatting helpers."""
from __future__ import annotations

from os import PathLike


def format_digest_line(path: str | PathLike[str], hexdigest: str, *, algorithm: str = "SHA256") -> str:
    """Render ``SHA256(<path>) = <hex>`` without a trailing newline."""
    return f"{algorithm}({path}) = {hexdigest}"


__all__ = ["format_digest_line"]
