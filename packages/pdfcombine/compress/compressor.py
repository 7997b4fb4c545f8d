"""Compression engine for :mod:`pdfcombine.compress`."""

from __future__ import annotations

import dataclasses
import io
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from pypdf import PdfReader, PdfWriter

from ..core.model import CompressionLevel, CompressionMethod
from ..exceptions import CompressionFailedError
from .ghostscript import ExternalCompressor, GhostscriptCompressor
from .presets import CompressionPreset, get_preset
from .utils import request_workspace

_LOGGER = logging.getLogger("pdfcombine.compress")

PIPELINE_PRODUCER = "pdfcombine"


@dataclasses.dataclass(frozen=True, slots=True)
class CompressionResult:
    """Represents the outcome of a compression run."""

    data: bytes
    level: CompressionLevel
    method: CompressionMethod
    original_size: int

    @property
    def compressed_size(self) -> int:
        return len(self.data)

    @property
    def bytes_saved(self) -> int:
        return max(self.original_size - self.compressed_size, 0)

    @property
    def compression_ratio(self) -> float:
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size


def _pdf_timestamp(moment: datetime) -> str:
    return moment.strftime("D:%Y%m%d%H%M%S+00'00'")


def default_metadata(now: datetime | None = None) -> dict[str, str]:
    """Document info written in place of the original by high compression."""

    stamp = _pdf_timestamp(now or datetime.now(timezone.utc))
    return {
        "/Title": "",
        "/Author": "",
        "/Subject": "",
        "/Keywords": "",
        "/Creator": PIPELINE_PRODUCER,
        "/Producer": PIPELINE_PRODUCER,
        "/CreationDate": stamp,
        "/ModDate": stamp,
    }


def _rewrite_with_pypdf(data: bytes, preset: CompressionPreset) -> bytes:
    reader = PdfReader(io.BytesIO(data))
    writer = PdfWriter()

    pages = list(reader.pages)
    for start in range(0, len(pages), preset.batch_size):
        batch = pages[start : start + preset.batch_size]
        for page in batch:
            added = writer.add_page(page)
            added.compress_content_streams(level=preset.stream_compression)
        _LOGGER.debug(
            "Rewrote pages %d-%d of %d", start + 1, start + len(batch), len(pages)
        )

    writer.compress_identical_objects()

    if preset.strip_metadata:
        writer.add_metadata(default_metadata())
    else:
        metadata = reader.metadata or {}
        cleaned = {k: v for k, v in metadata.items() if v is not None}
        if cleaned:
            writer.add_metadata(cleaned)

    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def _compress_with_external(
    data: bytes,
    preset: CompressionPreset,
    compressor: ExternalCompressor,
    temp_root: str | Path | None,
) -> bytes:
    with request_workspace(temp_root) as workspace:
        source = workspace / "input.pdf"
        output = workspace / "output.pdf"
        source.write_bytes(data)

        compressor.run(source, output, preset)

        if not output.exists() or output.stat().st_size == 0:
            _LOGGER.error("External compressor produced no output at %s", output)
            raise CompressionFailedError(
                "PDF compression failed.",
                details="The external compressor produced no output file.",
            )
        compressed = output.read_bytes()

    try:
        len(PdfReader(io.BytesIO(compressed)).pages)
    except Exception as exc:
        _LOGGER.error("External compressor output is not a readable PDF: %s", exc)
        raise CompressionFailedError(
            "PDF compression failed.",
            details=f"The external compressor produced an unreadable PDF: {exc}",
        ) from exc
    return compressed


def _identity(data: bytes, level: CompressionLevel, **_: object) -> CompressionResult:
    return CompressionResult(
        data=data,
        level=level,
        method=CompressionMethod.NONE,
        original_size=len(data),
    )


def _reduce(
    data: bytes,
    level: CompressionLevel,
    *,
    compressor: ExternalCompressor,
    temp_root: str | Path | None,
) -> CompressionResult:
    preset = get_preset(level)

    if compressor.probe():
        compressed = _compress_with_external(data, preset, compressor, temp_root)
        method = CompressionMethod.EXTERNAL_COMPRESSOR
    else:
        _LOGGER.warning("Ghostscript not available, using basic compression")
        compressed = _rewrite_with_pypdf(data, preset)
        method = CompressionMethod.DOCUMENT_MODEL_REWRITE

    _LOGGER.info(
        "Compressed %d bytes to %d bytes at level %d using %s",
        len(data),
        len(compressed),
        level,
        method.value,
    )
    return CompressionResult(
        data=compressed,
        level=level,
        method=method,
        original_size=len(data),
    )


_STRATEGIES: dict[CompressionLevel, Callable[..., CompressionResult]] = {
    CompressionLevel.NONE: _identity,
    CompressionLevel.MEDIUM: _reduce,
    CompressionLevel.HIGH: _reduce,
}


def compress_pdf(
    data: bytes,
    level: CompressionLevel | int = CompressionLevel.NONE,
    *,
    compressor: ExternalCompressor | None = None,
    temp_root: str | Path | None = None,
) -> CompressionResult:
    """Shrink the serialized PDF in *data* according to *level*.

    ``NONE`` returns *data* untouched. ``MEDIUM`` and ``HIGH`` use *compressor*
    when its probe succeeds and otherwise rewrite the document in-process with
    pypdf. Once the external compressor has been attempted its failure is
    final: :class:`CompressionFailedError` is raised and no fallback runs.
    """

    try:
        level = CompressionLevel(level)
    except ValueError as exc:
        raise ValueError(f"Unknown compression level: {level}") from exc

    if compressor is None:
        compressor = GhostscriptCompressor()

    strategy = _STRATEGIES[level]
    return strategy(data, level, compressor=compressor, temp_root=temp_root)


__all__ = ["CompressionResult", "compress_pdf", "default_metadata", "PIPELINE_PRODUCER"]
