"""CLI helpers for estimating compressed output size."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace, _SubParsersAction

from ...compress.info import SizeEstimate, estimate_output_size
from ...core.utils import resolve_path, sizeof_fmt
from ...pipeline import parse_compression_level


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("estimate", help="Estimate merged output size")
    parser.add_argument("inputs", nargs="+", help="Input PDF files")
    parser.add_argument("--level", choices=["0", "1", "2"], default="0", help="Compression level")
    parser.set_defaults(handler=run)


def run(args: Namespace) -> SizeEstimate:
    total = sum(resolve_path(path).stat().st_size for path in args.inputs)
    estimate = estimate_output_size(total, parse_compression_level(args.level))
    print(
        f"original {sizeof_fmt(estimate.original_size)}, "
        f"estimated {sizeof_fmt(estimate.estimated_size)} "
        f"({estimate.reduction_percent:.0f}% smaller)"
    )
    return estimate
