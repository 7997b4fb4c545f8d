"""Merge PDF uploads in order and optionally shrink the result."""

from __future__ import annotations

from .compress import (
    CompressionPreset,
    CompressionResult,
    ExternalCompressor,
    GhostscriptCompressor,
    SizeEstimate,
    compress_pdf,
    estimate_output_size,
)
from .config import Settings, load_settings
from .core.model import (
    CompressionLevel,
    CompressionMethod,
    InputDocument,
    MergedDocument,
    OutputArtifact,
)
from .exceptions import (
    CompressionFailedError,
    InvalidDocumentError,
    PdfCombineError,
    ValidationError,
)
from .merge import DocumentInfo, get_document_info, merge_documents
from .pipeline import parse_compression_level, run_pipeline, validate_documents

__version__ = "0.1.0"

__all__ = [
    "CompressionLevel",
    "CompressionMethod",
    "CompressionPreset",
    "CompressionResult",
    "CompressionFailedError",
    "DocumentInfo",
    "ExternalCompressor",
    "GhostscriptCompressor",
    "InputDocument",
    "InvalidDocumentError",
    "MergedDocument",
    "OutputArtifact",
    "PdfCombineError",
    "Settings",
    "SizeEstimate",
    "ValidationError",
    "compress_pdf",
    "estimate_output_size",
    "get_document_info",
    "load_settings",
    "merge_documents",
    "parse_compression_level",
    "run_pipeline",
    "validate_documents",
]
