"""Merge functionality for the :mod:`pdfcombine.merge` package."""

from __future__ import annotations

import io
import logging
from typing import Sequence

from pypdf import PdfWriter

from ..core.model import InputDocument, MergedDocument
from ..exceptions import ValidationError
from .validators import load_document

LOGGER = logging.getLogger("pdfcombine.merge")


def merge_documents(documents: Sequence[InputDocument | bytes]) -> MergedDocument:
    """Concatenate the pages of *documents* into a single serialized PDF.

    Args:
        documents: The PDFs to merge, in output order. Raw ``bytes`` are
            accepted alongside :class:`InputDocument` values.

    Raises:
        ValidationError: If no documents were provided.
        InvalidDocumentError: If any input cannot be parsed. Nothing is
            returned for the inputs that did parse.
    """

    inputs = [InputDocument.coerce(document) for document in documents]
    if not inputs:
        raise ValidationError("No PDF files uploaded.")

    writer = PdfWriter()
    page_counts: list[int] = []

    for index, document in enumerate(inputs, start=1):
        reader = load_document(document.data, index=index, filename=document.filename)
        for page_index, page in enumerate(reader.pages):
            LOGGER.debug("Adding page %s from %s", page_index, document.describe(index))
            writer.add_page(page)
        page_counts.append(len(reader.pages))

    buffer = io.BytesIO()
    writer.write(buffer)
    data = buffer.getvalue()

    LOGGER.info(
        "Merged %d PDF(s) into %d page(s), %d bytes",
        len(inputs),
        sum(page_counts),
        len(data),
    )
    return MergedDocument(
        data=data,
        page_count=sum(page_counts),
        source_page_counts=tuple(page_counts),
    )


__all__ = ["merge_documents"]
