"""Domain models shared by the merge and compression stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class CompressionLevel(IntEnum):
    """Requested compression intensity."""

    NONE = 0
    MEDIUM = 1
    HIGH = 2


class CompressionMethod(str, Enum):
    """Strategy that actually produced the output bytes."""

    NONE = "none"
    DOCUMENT_MODEL_REWRITE = "document-model-rewrite"
    EXTERNAL_COMPRESSOR = "external-compressor"


@dataclass(frozen=True, slots=True)
class InputDocument:
    """One uploaded PDF, kept as the raw bytes received."""

    data: bytes
    filename: str | None = None

    @classmethod
    def coerce(cls, document: InputDocument | bytes | bytearray) -> InputDocument:
        if isinstance(document, cls):
            return document
        return cls(data=bytes(document))

    @property
    def size(self) -> int:
        return len(self.data)

    def describe(self, index: int) -> str:
        if self.filename:
            return f"'{self.filename}' (file {index})"
        return f"file {index}"


@dataclass(frozen=True, slots=True)
class MergedDocument:
    """Serialized result of concatenating the pages of every input."""

    data: bytes
    page_count: int
    source_page_counts: tuple[int, ...] = field(default_factory=tuple)

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class OutputArtifact:
    """Final PDF returned to the caller together with processing details."""

    data: bytes
    level: CompressionLevel
    method: CompressionMethod
    page_count: int
    merged_size: int

    @property
    def content_length(self) -> int:
        return len(self.data)

    @property
    def filename(self) -> str:
        if self.level is CompressionLevel.NONE:
            return "merged.pdf"
        return "merged_compressed.pdf"

    @property
    def bytes_saved(self) -> int:
        return max(self.merged_size - self.content_length, 0)

    @property
    def compression_ratio(self) -> float:
        if self.merged_size == 0:
            return 1.0
        return self.content_length / self.merged_size


__all__ = [
    "CompressionLevel",
    "CompressionMethod",
    "InputDocument",
    "MergedDocument",
    "OutputArtifact",
]
