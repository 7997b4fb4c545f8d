"""Size estimates shown before a merge is requested."""

from __future__ import annotations

import dataclasses
import logging

from ..core.model import CompressionLevel

_LOGGER = logging.getLogger("pdfcombine.compress")

ESTIMATED_RATIOS: dict[CompressionLevel, float] = {
    CompressionLevel.NONE: 1.0,
    CompressionLevel.MEDIUM: 0.7,
    CompressionLevel.HIGH: 0.4,
}


@dataclasses.dataclass(frozen=True, slots=True)
class SizeEstimate:
    """Rough expected output size; not a promise about the real result."""

    original_size: int
    estimated_size: int
    level: CompressionLevel

    @property
    def reduction_percent(self) -> float:
        if self.original_size == 0:
            return 0.0
        return (self.original_size - self.estimated_size) / self.original_size * 100.0


def estimate_output_size(total_bytes: int, level: CompressionLevel | int) -> SizeEstimate:
    """Estimate the compressed size of inputs totalling *total_bytes*."""

    if total_bytes < 0:
        raise ValueError("total_bytes must not be negative")
    level = CompressionLevel(level)
    estimate = SizeEstimate(
        original_size=total_bytes,
        estimated_size=int(total_bytes * ESTIMATED_RATIOS[level]),
        level=level,
    )
    _LOGGER.debug("Size estimate: %s", estimate)
    return estimate


__all__ = ["ESTIMATED_RATIOS", "SizeEstimate", "estimate_output_size"]
