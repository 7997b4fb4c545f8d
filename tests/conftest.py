from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from pypdf import PdfReader, PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
for candidate in (PROJECT_ROOT, PROJECT_ROOT / "packages"):
    if str(candidate) not in sys.path:
        sys.path.insert(0, str(candidate))

from pdfcombine.compress.presets import CompressionPreset  # noqa: E402
from pdfcombine.config import Settings  # noqa: E402
from pdfcombine.exceptions import CompressionFailedError  # noqa: E402

PdfFactory = Callable[..., bytes]


def build_pdf(widths: Sequence[int], title: str | None = None) -> bytes:
    writer = PdfWriter()
    for width in widths:
        writer.add_blank_page(width=width, height=100)
    if title is not None:
        writer.add_metadata({"/Title": title, "/Author": "pdfcombine-tests"})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def page_widths(data: bytes) -> list[int]:
    reader = PdfReader(io.BytesIO(data))
    return [int(page.mediabox.width) for page in reader.pages]


class FakeCompressor:
    """Stand-in for Ghostscript recording how the pipeline used it."""

    def __init__(self, *, available: bool = True, behaviour: str = "copy") -> None:
        self.available = available
        self.behaviour = behaviour
        self.probe_calls = 0
        self.presets: list[CompressionPreset] = []
        self.workspaces: list[Path] = []

    @property
    def run_calls(self) -> int:
        return len(self.presets)

    def probe(self) -> bool:
        self.probe_calls += 1
        return self.available

    def run(self, source: Path, output: Path, preset: CompressionPreset) -> None:
        self.presets.append(preset)
        self.workspaces.append(source.parent)
        if self.behaviour == "copy":
            output.write_bytes(source.read_bytes())
        elif self.behaviour == "fail":
            raise CompressionFailedError(
                "PDF compression failed.",
                returncode=1,
                details="Ghostscript exited with code 1.",
            )
        elif self.behaviour == "garbage":
            output.write_bytes(b"this is not a pdf")
        # "no-output" leaves the output path untouched


@pytest.fixture()
def pdf_factory() -> PdfFactory:
    return build_pdf


@pytest.fixture()
def doc_a() -> bytes:
    return build_pdf([101, 102, 103], title="Document A")


@pytest.fixture()
def doc_b() -> bytes:
    return build_pdf([201, 202])


@pytest.fixture()
def empty_pdf() -> bytes:
    return build_pdf([])


@pytest.fixture()
def workspace_root(tmp_path: Path) -> Path:
    root = tmp_path / "work"
    root.mkdir()
    return root


@pytest.fixture()
def settings(workspace_root: Path) -> Settings:
    return Settings(temp_dir=workspace_root)


@pytest.fixture()
def make_compressor() -> Callable[..., FakeCompressor]:
    return FakeCompressor
