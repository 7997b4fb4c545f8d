"""Request-level orchestration of the merge and compression stages."""

from __future__ import annotations

import logging
from typing import Sequence

from .compress import ExternalCompressor, GhostscriptCompressor, compress_pdf
from .config import Settings, load_settings
from .core.model import CompressionLevel, InputDocument, OutputArtifact
from .exceptions import ValidationError
from .merge import merge_documents

LOGGER = logging.getLogger("pdfcombine.pipeline")

_LEVEL_LITERALS = {str(int(level)): level for level in CompressionLevel}


def parse_compression_level(raw: str | int | None) -> CompressionLevel:
    """Parse a form value into a :class:`CompressionLevel`.

    ``None`` and blank strings mean no compression. Strings must be exactly
    ``"0"``, ``"1"`` or ``"2"`` once surrounding whitespace is removed.
    """

    if raw is None:
        return CompressionLevel.NONE
    if isinstance(raw, bool):
        raise ValidationError("Invalid compression level.", details=repr(raw))
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return CompressionLevel.NONE
        if text not in _LEVEL_LITERALS:
            raise ValidationError(
                "Invalid compression level.",
                details=f"Expected 0, 1 or 2, got {text!r}.",
            )
        return _LEVEL_LITERALS[text]
    try:
        return CompressionLevel(raw)
    except ValueError as exc:
        raise ValidationError(
            "Invalid compression level.",
            details=f"Expected 0, 1 or 2, got {raw!r}.",
        ) from exc


def check_file_count(count: int, settings: Settings) -> None:
    """Reject an empty selection or one above ``settings.max_files``."""

    if count == 0:
        raise ValidationError("No PDF files uploaded.")
    if count > settings.max_files:
        raise ValidationError(
            "Too many PDF files uploaded.",
            details=f"At most {settings.max_files} files can be merged at once, got {count}.",
        )


def check_file_size(size: int, label: str, settings: Settings) -> None:
    """Reject a single file larger than ``settings.max_file_bytes``."""

    if size > settings.max_file_bytes:
        raise ValidationError(
            "PDF file is too large.",
            details=f"{label} is {size} bytes; the limit is {settings.max_file_bytes} bytes.",
        )


def validate_documents(
    documents: Sequence[InputDocument | bytes],
    settings: Settings,
) -> list[InputDocument]:
    """Check request-level limits before any document is parsed."""

    inputs = [InputDocument.coerce(document) for document in documents]
    check_file_count(len(inputs), settings)
    for index, document in enumerate(inputs, start=1):
        check_file_size(document.size, document.describe(index), settings)
    return inputs


def run_pipeline(
    documents: Sequence[InputDocument | bytes],
    level: CompressionLevel | int | str | None = CompressionLevel.NONE,
    *,
    compressor: ExternalCompressor | None = None,
    settings: Settings | None = None,
) -> OutputArtifact:
    """Merge *documents* in order and compress the result at *level*.

    Raises:
        ValidationError: For an invalid level or file selection.
        InvalidDocumentError: When an input is not a parseable PDF.
        CompressionFailedError: When the external compressor was attempted
            and failed.
    """

    settings = settings or load_settings()
    compression_level = parse_compression_level(level)
    inputs = validate_documents(documents, settings)

    LOGGER.debug("Running pipeline for %d file(s) at level %d", len(inputs), compression_level)
    merged = merge_documents(inputs)

    if compressor is None:
        compressor = GhostscriptCompressor.from_settings(settings)
    result = compress_pdf(
        merged.data,
        compression_level,
        compressor=compressor,
        temp_root=settings.temp_dir,
    )

    artifact = OutputArtifact(
        data=result.data,
        level=compression_level,
        method=result.method,
        page_count=merged.page_count,
        merged_size=merged.size,
    )
    LOGGER.info(
        "Produced %s: %d page(s), %d bytes, method=%s",
        artifact.filename,
        artifact.page_count,
        artifact.content_length,
        artifact.method.value,
    )
    return artifact


__all__ = [
    "parse_compression_level",
    "check_file_count",
    "check_file_size",
    "validate_documents",
    "run_pipeline",
]
