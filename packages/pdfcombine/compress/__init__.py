"""Compression stage: shrink a merged PDF with Ghostscript or pypdf."""

from __future__ import annotations

from .compressor import CompressionResult, compress_pdf, default_metadata
from .ghostscript import (
    ExternalCompressor,
    GhostscriptCompressor,
    build_ghostscript_command,
)
from .info import SizeEstimate, estimate_output_size
from .presets import PRESETS, CompressionPreset, get_preset
from .utils import request_workspace

__all__ = [
    "CompressionResult",
    "compress_pdf",
    "default_metadata",
    "ExternalCompressor",
    "GhostscriptCompressor",
    "build_ghostscript_command",
    "SizeEstimate",
    "estimate_output_size",
    "PRESETS",
    "CompressionPreset",
    "get_preset",
    "request_workspace",
]
