"""Subcommands exposed by the ``pdfcombine`` CLI."""
