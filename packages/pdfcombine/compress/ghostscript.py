"""Ghostscript integration for :mod:`pdfcombine.compress`."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from ..config import DEFAULT_GS_PROBE_TIMEOUT, DEFAULT_GS_TIMEOUT, Settings
from ..exceptions import CompressionFailedError
from .presets import CompressionPreset
from .utils import run_subprocess, which

_LOGGER = logging.getLogger("pdfcombine.compress")

GHOSTSCRIPT_EXECUTABLES: tuple[str, ...] = ("gs", "gswin64c", "gswin32c")


@runtime_checkable
class ExternalCompressor(Protocol):
    """Capability the compression stage needs from an out-of-process tool."""

    def probe(self) -> bool:
        """Return ``True`` when the tool is installed and answers."""

    def run(self, source: Path, output: Path, preset: CompressionPreset) -> None:
        """Compress *source* into *output* or raise :class:`CompressionFailedError`."""


def build_ghostscript_command(
    executable: str,
    source: Path,
    output: Path,
    preset: CompressionPreset,
) -> list[str]:
    """Construct the Ghostscript command for *preset*."""

    return [
        executable,
        "-sDEVICE=pdfwrite",
        "-dCompatibilityLevel=1.4",
        f"-dPDFSETTINGS={preset.pdf_settings}",
        *preset.ghostscript_flags,
        "-dNOPAUSE",
        "-dQUIET",
        "-dBATCH",
        "-dSAFER",
        f"-sOutputFile={output}",
        str(source),
    ]


def translate_ghostscript_error(stderr: str, returncode: int) -> str:
    """Turn Ghostscript stderr into a message a user can act on."""

    stderr_lower = (stderr or "").lower()
    if "invalidfileaccess" in stderr_lower or "password" in stderr_lower:
        return "PDF is password-protected or locked."
    if "typecheck" in stderr_lower or "rangecheck" in stderr_lower:
        return "PDF has corrupted internal data."
    if any(marker in stderr_lower for marker in ("undefined", "ioerror", "syntaxerror", "eofread")):
        return "PDF is damaged or corrupted."
    return f"Ghostscript exited with code {returncode}."


class GhostscriptCompressor:
    """:class:`ExternalCompressor` backed by a Ghostscript executable."""

    def __init__(
        self,
        executables: Sequence[str] = GHOSTSCRIPT_EXECUTABLES,
        *,
        timeout: float = DEFAULT_GS_TIMEOUT,
        probe_timeout: float = DEFAULT_GS_PROBE_TIMEOUT,
    ) -> None:
        self.executables = tuple(executables)
        self.timeout = timeout
        self.probe_timeout = probe_timeout
        self._executable: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GhostscriptCompressor":
        return cls(
            timeout=settings.ghostscript_timeout,
            probe_timeout=settings.ghostscript_probe_timeout,
        )

    @property
    def executable(self) -> str | None:
        return self._executable

    def probe(self) -> bool:
        executable = which(self.executables)
        if executable is None:
            _LOGGER.debug("Ghostscript not found on PATH")
            self._executable = None
            return False

        try:
            completed = run_subprocess(
                [executable, "--version"],
                check=True,
                timeout=self.probe_timeout,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            _LOGGER.debug("Ghostscript probe failed: %s", exc)
            self._executable = None
            return False

        _LOGGER.debug("Ghostscript %s available at %s", completed.stdout.strip(), executable)
        self._executable = executable
        return True

    def run(self, source: Path, output: Path, preset: CompressionPreset) -> None:
        executable = self._executable or which(self.executables)
        if executable is None:
            raise CompressionFailedError("Ghostscript executable not found.")

        command = build_ghostscript_command(executable, source, output, preset)
        _LOGGER.info("Running Ghostscript with %s for level %d", preset.pdf_settings, preset.level)
        try:
            completed = run_subprocess(command, check=False, timeout=self.timeout)
        except subprocess.TimeoutExpired as exc:
            _LOGGER.error("Ghostscript timed out after %s seconds", self.timeout)
            raise CompressionFailedError(
                "PDF compression timed out.",
                details=f"Ghostscript did not finish within {self.timeout:g} seconds.",
            ) from exc
        except OSError as exc:
            _LOGGER.error("Failed to execute Ghostscript: %s", exc)
            raise CompressionFailedError("Failed to execute Ghostscript.", details=str(exc)) from exc

        if completed.returncode != 0:
            _LOGGER.error(
                "Ghostscript failed with code %s: %s", completed.returncode, completed.stderr
            )
            raise CompressionFailedError(
                "PDF compression failed.",
                returncode=completed.returncode,
                details=translate_ghostscript_error(completed.stderr, completed.returncode),
            )


__all__ = [
    "ExternalCompressor",
    "GhostscriptCompressor",
    "GHOSTSCRIPT_EXECUTABLES",
    "build_ghostscript_command",
    "translate_ghostscript_error",
]
