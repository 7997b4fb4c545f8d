"""Shared models and helpers used across pdfcombine stages."""

from __future__ import annotations

from .model import (
    CompressionLevel,
    CompressionMethod,
    InputDocument,
    MergedDocument,
    OutputArtifact,
)
from .utils import get_logger, resolve_path, sizeof_fmt

__all__ = [
    "CompressionLevel",
    "CompressionMethod",
    "InputDocument",
    "MergedDocument",
    "OutputArtifact",
    "get_logger",
    "resolve_path",
    "sizeof_fmt",
]
