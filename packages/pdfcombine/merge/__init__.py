"""Merge stage: concatenate uploaded PDFs in order."""

from __future__ import annotations

from .merger import merge_documents
from .validators import DocumentInfo, get_document_info, load_document

__all__ = ["merge_documents", "DocumentInfo", "get_document_info", "load_document"]
