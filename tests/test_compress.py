from __future__ import annotations

import io
import warnings
from datetime import datetime, timezone
from pathlib import Path

import pytest
from pypdf import PdfReader

from pdfcombine.compress import compress_pdf, default_metadata, get_preset, request_workspace
from pdfcombine.compress import compressor
from pdfcombine.compress import utils as compress_utils
from pdfcombine.compress.compressor import CompressionResult
from pdfcombine.compress.info import estimate_output_size
from pdfcombine.compress.presets import CompressionPreset
from pdfcombine.core.model import CompressionLevel, CompressionMethod
from pdfcombine.exceptions import CompressionFailedError

from conftest import page_widths


def test_level_none_is_identity_and_never_probes(doc_a: bytes, make_compressor) -> None:
    fake = make_compressor()

    result = compress_pdf(doc_a, CompressionLevel.NONE, compressor=fake)

    assert result.data is doc_a
    assert result.method is CompressionMethod.NONE
    assert fake.probe_calls == 0
    assert fake.run_calls == 0


@pytest.mark.parametrize("level", [CompressionLevel.MEDIUM, CompressionLevel.HIGH])
def test_falls_back_to_rewrite_when_tool_unavailable(
    doc_a: bytes, make_compressor, workspace_root: Path, level: CompressionLevel
) -> None:
    fake = make_compressor(available=False)

    result = compress_pdf(doc_a, level, compressor=fake, temp_root=workspace_root)

    assert result.method is CompressionMethod.DOCUMENT_MODEL_REWRITE
    assert result.level is level
    assert fake.probe_calls == 1
    assert fake.run_calls == 0
    assert page_widths(result.data) == [101, 102, 103]
    assert list(workspace_root.iterdir()) == []


@pytest.mark.parametrize("level", [CompressionLevel.MEDIUM, CompressionLevel.HIGH])
def test_uses_external_compressor_when_available(
    doc_a: bytes, make_compressor, workspace_root: Path, level: CompressionLevel
) -> None:
    fake = make_compressor()

    result = compress_pdf(doc_a, level, compressor=fake, temp_root=workspace_root)

    assert result.method is CompressionMethod.EXTERNAL_COMPRESSOR
    assert fake.presets == [get_preset(level)]
    assert result.data == doc_a
    assert not fake.workspaces[0].exists()
    assert list(workspace_root.iterdir()) == []


@pytest.mark.parametrize("behaviour", ["fail", "no-output", "garbage"])
def test_external_failure_is_terminal(
    doc_a: bytes,
    make_compressor,
    workspace_root: Path,
    monkeypatch: pytest.MonkeyPatch,
    behaviour: str,
) -> None:
    fake = make_compressor(behaviour=behaviour)

    def unexpected_rewrite(*_: object, **__: object) -> bytes:
        raise AssertionError("in-process rewrite must not run after an external attempt")

    monkeypatch.setattr(compressor, "_rewrite_with_pypdf", unexpected_rewrite)

    with pytest.raises(CompressionFailedError):
        compress_pdf(doc_a, CompressionLevel.HIGH, compressor=fake, temp_root=workspace_root)

    assert fake.run_calls == 1
    assert list(workspace_root.iterdir()) == []


def test_high_rewrite_resets_metadata(doc_a: bytes, make_compressor) -> None:
    result = compress_pdf(doc_a, CompressionLevel.HIGH, compressor=make_compressor(available=False))

    metadata = PdfReader(io.BytesIO(result.data)).metadata
    assert metadata is not None
    assert metadata.get("/Title") == ""
    assert metadata.get("/Author") == ""
    assert metadata.get("/Producer") == "pdfcombine"
    assert str(metadata.get("/CreationDate")).startswith("D:")


def test_medium_rewrite_keeps_metadata(doc_a: bytes, make_compressor) -> None:
    result = compress_pdf(doc_a, CompressionLevel.MEDIUM, compressor=make_compressor(available=False))

    metadata = PdfReader(io.BytesIO(result.data)).metadata
    assert metadata is not None
    assert metadata.get("/Title") == "Document A"


def test_rewrite_handles_zero_pages(empty_pdf: bytes, make_compressor) -> None:
    result = compress_pdf(empty_pdf, CompressionLevel.HIGH, compressor=make_compressor(available=False))

    assert page_widths(result.data) == []


def test_rewrite_batches_pages(pdf_factory) -> None:
    data = pdf_factory([50 + index for index in range(7)])
    preset = CompressionPreset(
        level=CompressionLevel.MEDIUM,
        batch_size=3,
        stream_compression=6,
        strip_metadata=False,
        pdf_settings="/ebook",
    )

    rewritten = compressor._rewrite_with_pypdf(data, preset)

    assert page_widths(rewritten) == [50 + index for index in range(7)]


def test_rewrite_uses_current_pypdf_api(doc_a: bytes) -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        rewritten = compressor._rewrite_with_pypdf(doc_a, get_preset(CompressionLevel.HIGH))

    assert page_widths(rewritten) == [101, 102, 103]


def test_preset_rejects_non_positive_batch_size() -> None:
    with pytest.raises(ValueError):
        CompressionPreset(
            level=CompressionLevel.MEDIUM,
            batch_size=0,
            stream_compression=6,
            strip_metadata=False,
            pdf_settings="/ebook",
        )


def test_presets_carry_level_parameters() -> None:
    medium = get_preset(CompressionLevel.MEDIUM)
    high = get_preset(CompressionLevel.HIGH)

    assert medium.pdf_settings == "/ebook"
    assert high.pdf_settings == "/screen"
    assert high.batch_size < medium.batch_size
    assert "-dColorImageResolution=150" in high.ghostscript_flags
    assert "-dMonoImageDownsampleType=/Bicubic" in high.ghostscript_flags
    assert "-dConvertCMYKImagesToRGB=true" in high.ghostscript_flags

    with pytest.raises(ValueError):
        get_preset(CompressionLevel.NONE)


def test_compress_pdf_invalid_level(doc_a: bytes, make_compressor) -> None:
    with pytest.raises(ValueError):
        compress_pdf(doc_a, 7, compressor=make_compressor())


def test_default_metadata_uses_given_time() -> None:
    moment = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)

    metadata = default_metadata(moment)

    assert metadata["/CreationDate"] == "D:20240506070809+00'00'"
    assert metadata["/ModDate"] == metadata["/CreationDate"]
    assert metadata["/Keywords"] == ""


def test_compression_result_properties() -> None:
    result = CompressionResult(
        data=b"x" * 100,
        level=CompressionLevel.MEDIUM,
        method=CompressionMethod.DOCUMENT_MODEL_REWRITE,
        original_size=200,
    )

    assert result.compressed_size == 100
    assert result.bytes_saved == 100
    assert result.compression_ratio == 0.5


def test_compression_result_handles_zero_original_size() -> None:
    result = CompressionResult(
        data=b"",
        level=CompressionLevel.NONE,
        method=CompressionMethod.NONE,
        original_size=0,
    )

    assert result.bytes_saved == 0
    assert result.compression_ratio == 1.0


def test_request_workspace_removes_directory_on_error(workspace_root: Path) -> None:
    seen: list[Path] = []

    with pytest.raises(RuntimeError):
        with request_workspace(workspace_root) as workspace:
            seen.append(workspace)
            (workspace / "input.pdf").write_bytes(b"data")
            raise RuntimeError("boom")

    assert seen and not seen[0].exists()


def test_request_workspace_logs_cleanup_errors(
    workspace_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    logged: list[str] = []

    def failing_rmtree(path: Path) -> None:
        raise OSError("device busy")

    monkeypatch.setattr(compress_utils.shutil, "rmtree", failing_rmtree)
    monkeypatch.setattr(
        compress_utils._LOGGER, "warning", lambda message, *args: logged.append(message % args)
    )

    with request_workspace(workspace_root):
        pass

    assert logged and "device busy" in logged[0]


@pytest.mark.parametrize(
    ("level", "expected"),
    [(CompressionLevel.NONE, 1000), (CompressionLevel.MEDIUM, 700), (CompressionLevel.HIGH, 400)],
)
def test_estimate_output_size(level: CompressionLevel, expected: int) -> None:
    estimate = estimate_output_size(1000, level)

    assert estimate.estimated_size == expected
    assert estimate.reduction_percent == pytest.approx((1000 - expected) / 10)


def test_estimate_output_size_edge_cases() -> None:
    assert estimate_output_size(0, CompressionLevel.HIGH).reduction_percent == 0.0
    with pytest.raises(ValueError):
        estimate_output_size(-1, CompressionLevel.NONE)
