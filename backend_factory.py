"""Backend factory for switching between the python-pptx and recording backends.

The python-pptx backend is the default. ``presentation.backend: recording``
(or a dry run) selects the in-memory recording backend, which writes nothing.
"""
from __future__ import annotations

from pathlib import Path

from config_loader import AlbumConfig
from slide_backends.base import SlideBackend

POINTS_PER_INCH = 72.0


def make_backend(config: AlbumConfig, output_path: Path | None = None, dry_run: bool = False) -> SlideBackend:
    width_in, height_in = config.slide_size_in
    backend_name = "recording" if dry_run else config.backend_name

    if backend_name == "recording":
        from slide_backends.recording import RecordingBackend  # lazy import

        if width_in and height_in:
            return RecordingBackend(
                width_in * POINTS_PER_INCH,
                height_in * POINTS_PER_INCH,
                strict_images=not dry_run,
            )
        return RecordingBackend(strict_images=not dry_run)

    if backend_name == "pptx":
        from slide_backends.pptx.backend import PptxBackend  # lazy import

        return PptxBackend(
            output_path or config.output_path,
            template=config.template,
            slide_width_in=width_in,
            slide_height_in=height_in,
        )

    raise ValueError(f"Unknown presentation backend: {backend_name}")
