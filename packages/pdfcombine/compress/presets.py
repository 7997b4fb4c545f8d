"""Per-level compression settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..core.model import CompressionLevel

HIGH_IMAGE_RESOLUTION = 150


@dataclass(frozen=True, slots=True)
class CompressionPreset:
    """Everything one compression level needs, for both strategies.

    ``batch_size`` and ``stream_compression`` drive the in-process rewrite;
    ``pdf_settings`` and ``ghostscript_flags`` drive the external compressor.
    """

    level: CompressionLevel
    batch_size: int
    stream_compression: int
    strip_metadata: bool
    pdf_settings: str
    ghostscript_flags: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError("batch_size must be a positive integer")


def _downsample_flags(resolution: int) -> tuple[str, ...]:
    flags: list[str] = []
    for channel in ("Color", "Gray", "Mono"):
        flags.extend(
            [
                f"-d{channel}ImageDownsampleType=/Bicubic",
                f"-d{channel}ImageResolution={resolution}",
            ]
        )
    return tuple(flags)


PRESETS: dict[CompressionLevel, CompressionPreset] = {
    CompressionLevel.MEDIUM: CompressionPreset(
        level=CompressionLevel.MEDIUM,
        batch_size=50,
        stream_compression=6,
        strip_metadata=False,
        pdf_settings="/ebook",
    ),
    CompressionLevel.HIGH: CompressionPreset(
        level=CompressionLevel.HIGH,
        batch_size=20,
        stream_compression=9,
        strip_metadata=True,
        pdf_settings="/screen",
        ghostscript_flags=(
            "-dEmbedAllFonts=true",
            "-dSubsetFonts=true",
            "-dConvertCMYKImagesToRGB=true",
            *_downsample_flags(HIGH_IMAGE_RESOLUTION),
        ),
    ),
}


def get_preset(level: CompressionLevel) -> CompressionPreset:
    """Return the preset for *level*; ``NONE`` has no preset."""

    try:
        return PRESETS[level]
    except KeyError as exc:
        raise ValueError(f"No compression preset for level {level!r}") from exc


__all__ = ["CompressionPreset", "PRESETS", "HIGH_IMAGE_RESOLUTION", "get_preset"]
