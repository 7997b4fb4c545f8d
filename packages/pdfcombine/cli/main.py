"""Command line interface for pdfcombine."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from ..config import load_settings
from ..core.utils import get_logger
from ..exceptions import PdfCombineError, ValidationError
from .commands import estimate, merge

COMMAND_MODULES = [merge, estimate]


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pdfcombine", description="Merge and compress PDFs")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True
    for module in COMMAND_MODULES:
        module.configure_parser(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _create_parser()
    args = parser.parse_args(argv)

    try:
        get_logger("pdfcombine", load_settings().log_level)
        args.handler(args)
    except ValidationError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        if exc.details:
            print(f"  {exc.details}", file=sys.stderr)
        return 2
    except (PdfCombineError, OSError, RuntimeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        details = getattr(exc, "details", None)
        if details:
            print(f"  {details}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
