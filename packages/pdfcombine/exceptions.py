"""Custom exception types for the :mod:`pdfcombine` package."""

from __future__ import annotations


class PdfCombineError(Exception):
    """Base exception for all pdfcombine related errors."""

    def __init__(self, message: str, *, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(PdfCombineError):
    """Raised when a request is rejected before any document is processed."""


class InvalidDocumentError(PdfCombineError):
    """Raised when an input cannot be parsed as a PDF."""

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        filename: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.index = index
        self.filename = filename


class CompressionFailedError(PdfCombineError):
    """Raised when the external compressor was attempted and did not succeed."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.returncode = returncode


__all__ = [
    "PdfCombineError",
    "ValidationError",
    "InvalidDocumentError",
    "CompressionFailedError",
]
