"""CLI helpers for merging (and optionally compressing) PDFs."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace, _SubParsersAction
from pathlib import Path

from ...config import load_settings
from ...core.model import InputDocument
from ...core.utils import get_logger, resolve_path, sizeof_fmt
from ...pipeline import run_pipeline

LOGGER = get_logger("pdfcombine.cli")


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("merge", help="Merge PDFs in the given order")
    parser.add_argument("inputs", nargs="+", help="Input PDF files, in output order")
    parser.add_argument("-o", "--output", required=True, help="Output PDF path")
    parser.add_argument(
        "--level",
        choices=["0", "1", "2"],
        default="0",
        help="Compression level: 0 none, 1 medium, 2 high",
    )
    parser.set_defaults(handler=run)


def run(args: Namespace) -> Path:
    documents = []
    for raw_path in args.inputs:
        path = resolve_path(raw_path)
        documents.append(InputDocument(data=path.read_bytes(), filename=path.name))

    artifact = run_pipeline(documents, args.level, settings=load_settings())

    output = resolve_path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(artifact.data)

    LOGGER.debug("Wrote %s", output)
    print(
        f"{output}: {artifact.page_count} page(s), {sizeof_fmt(artifact.content_length)} "
        f"(merged {sizeof_fmt(artifact.merged_size)}, method {artifact.method.value})"
    )
    return output
