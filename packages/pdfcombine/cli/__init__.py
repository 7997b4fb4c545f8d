"""Command line entry points for pdfcombine."""

from __future__ import annotations

from .main import main

__all__ = ["main"]
