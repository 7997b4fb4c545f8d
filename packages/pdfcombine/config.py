"""Runtime configuration loaded from ``PDFCOMBINE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MAX_FILES = 50
DEFAULT_MAX_FILE_BYTES = 50 * 1024 * 1024
DEFAULT_GS_TIMEOUT = 120.0
DEFAULT_GS_PROBE_TIMEOUT = 10.0


@dataclass(frozen=True, slots=True)
class Settings:
    """Limits and tool settings applied to every pipeline run."""

    max_files: int = DEFAULT_MAX_FILES
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    ghostscript_timeout: float = DEFAULT_GS_TIMEOUT
    ghostscript_probe_timeout: float = DEFAULT_GS_PROBE_TIMEOUT
    temp_dir: Path | None = None
    log_level: str = "INFO"


def _read_positive(name: str, default: float, cast: type) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}.") from exc
    if value <= 0:
        raise RuntimeError(f"{name} must be greater than zero, got {raw!r}.")
    return value


def load_settings() -> Settings:
    """Build :class:`Settings` from the process environment."""

    temp_dir = os.getenv("PDFCOMBINE_TEMP_DIR")
    return Settings(
        max_files=int(_read_positive("PDFCOMBINE_MAX_FILES", DEFAULT_MAX_FILES, int)),
        max_file_bytes=int(_read_positive("PDFCOMBINE_MAX_FILE_BYTES", DEFAULT_MAX_FILE_BYTES, int)),
        ghostscript_timeout=_read_positive("PDFCOMBINE_GS_TIMEOUT", DEFAULT_GS_TIMEOUT, float),
        ghostscript_probe_timeout=_read_positive(
            "PDFCOMBINE_GS_PROBE_TIMEOUT", DEFAULT_GS_PROBE_TIMEOUT, float
        ),
        temp_dir=Path(temp_dir).expanduser() if temp_dir else None,
        log_level=os.getenv("PDFCOMBINE_LOG_LEVEL", "INFO").upper(),
    )


__all__ = ["Settings", "load_settings"]
