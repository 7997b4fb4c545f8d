"""Parsing and inspection helpers for :mod:`pdfcombine.merge`."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field

from pypdf import PasswordType, PdfReader

from ..exceptions import InvalidDocumentError

LOGGER = logging.getLogger("pdfcombine.merge")


@dataclass(slots=True)
class DocumentInfo:
    """Summary information about a PDF held in memory."""

    page_count: int
    metadata: dict[str, str] = field(default_factory=dict)
    encrypted: bool = False


def _describe(index: int | None, filename: str | None) -> str:
    if filename and index is not None:
        return f"'{filename}' (file {index})"
    if filename:
        return f"'{filename}'"
    if index is not None:
        return f"file {index}"
    return "document"


def load_document(
    data: bytes,
    *,
    index: int | None = None,
    filename: str | None = None,
) -> PdfReader:
    """Parse *data* into a :class:`PdfReader`.

    Encrypted documents are opened with the empty user password. Any parse
    failure is reported as :class:`InvalidDocumentError`.
    """

    label = _describe(index, filename)
    if not data:
        raise InvalidDocumentError(
            f"Invalid PDF: {label} is empty.", index=index, filename=filename
        )

    try:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            LOGGER.debug("Attempting to decrypt encrypted PDF %s", label)
            if reader.decrypt("") == PasswordType.NOT_DECRYPTED:
                raise ValueError("document requires a password")
        # page tree must resolve before any page is copied
        len(reader.pages)
    except Exception as exc:
        LOGGER.error("Failed to parse PDF %s: %s", label, exc)
        raise InvalidDocumentError(
            f"Invalid PDF: {label} could not be parsed.",
            index=index,
            filename=filename,
            details=str(exc),
        ) from exc
    return reader


def get_document_info(data: bytes) -> DocumentInfo:
    """Return :class:`DocumentInfo` for the PDF in *data*."""

    reader = load_document(data)
    metadata = {
        str(key): str(value)
        for key, value in (reader.metadata or {}).items()
        if value is not None
    }
    return DocumentInfo(
        page_count=len(reader.pages),
        metadata=metadata,
        encrypted=reader.is_encrypted,
    )


__all__ = ["DocumentInfo", "load_document", "get_document_info"]
