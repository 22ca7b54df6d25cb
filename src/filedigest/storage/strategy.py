from __future__ import annotations

from enum import Enum

from ..config import CONFIG


class Strategy(str, Enum):
    AUTO = "auto"
    MAPPED = "mapped"
    BUFFERED = "buffered"


def select_strategy(size: int, threshold: int | None = None) -> Strategy:
    """Pick the access strategy for a file of ``size`` bytes.

    Files strictly larger than ``threshold`` (default ``CONFIG.mmap_threshold``)
    are memory-mapped, everything else is read through the scratch buffer.
    """
    if size <= 0:
        raise ValueError(f"Cannot select a strategy for size {size}")
    limit = CONFIG.mmap_threshold if threshold is None else threshold
    return Strategy.MAPPED if size > limit else Strategy.BUFFERED


def resolve_strategy(requested: Strategy, size: int, threshold: int | None = None) -> Strategy:
    if requested is Strategy.AUTO:
        return select_strategy(size, threshold)
    return requested


__all__ = ["Strategy", "resolve_strategy", "select_strategy"]
