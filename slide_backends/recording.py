"""In-memory backend that records what the interpreter asks for.

Used for ``--dry-run`` and by the test-suite. Pictures are measured with
Pillow so the primary-image layout sees real aspect ratios.
"""
from __future__ import annotations

from itertools import count
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from PIL import Image

from logging_utils import get_logger

from .base import ShapeHandle, SlideBackend, SlideHandle, TextStyle
from .text_metrics import fitted_height

logger = get_logger(__name__)

DEFAULT_PICTURE_SIZE = (640.0, 480.0)
MEDIA_ICON_SIZE = 48.0


def _whole_dpi(value) -> int:
    # Same rounding and range as python-pptx applies to picture DPI.
    try:
        dpi = int(round(float(value)))
    except (TypeError, ValueError):
        return 72
    return dpi if 1 <= dpi <= 2048 else 72


def picture_size_points(path: Path) -> Tuple[float, float]:
    """Native picture size in points, honouring the DPI stored in the file."""
    with Image.open(path) as image:
        width_px, height_px = image.size
        dpi = image.info.get("dpi")
    if not isinstance(dpi, tuple):
        dpi = (72, 72)
    dpi_x, dpi_y = _whole_dpi(dpi[0]), _whole_dpi(dpi[1])
    return width_px * 72.0 / dpi_x, height_px * 72.0 / dpi_y


class RecordedShape(ShapeHandle):
    def __init__(
        self,
        shape_id: int,
        name: str,
        left: float,
        top: float,
        width: float,
        height: float,
        *,
        paragraphs: Optional[List[str]] = None,
        style: Optional[TextStyle] = None,
        source: Optional[Path] = None,
    ) -> None:
        self.shape_id = shape_id
        self.name = name
        self._left = left
        self._top = top
        self._width = width
        self._height = height
        self.paragraphs = paragraphs
        self.font_size = style.font_size if style else None
        self.style = style
        self.source = source
        if self.paragraphs is not None:
            self._fit_height()

    @property
    def left(self) -> float:
        return self._left

    @left.setter
    def left(self, value: float) -> None:
        self._left = float(value)

    @property
    def top(self) -> float:
        return self._top

    @top.setter
    def top(self, value: float) -> None:
        self._top = float(value)

    @property
    def width(self) -> float:
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        self._width = float(value)

    @property
    def height(self) -> float:
        return self._height

    @height.setter
    def height(self, value: float) -> None:
        self._height = float(value)

    @property
    def text(self) -> str:
        if not self.paragraphs:
            return ""
        return "\n".join(self.paragraphs)

    @property
    def paragraph_count(self) -> int:
        if not self.has_text:
            return 0
        return len(self.paragraphs or [])

    def append_text(self, text: str) -> None:
        if self.paragraphs is None:
            super().append_text(text)
        if self.has_text:
            self.paragraphs.extend(text.split("\n"))
        else:
            self.paragraphs[:] = text.split("\n")
        self._fit_height()

    def set_font_size(self, size: float) -> None:
        if self.paragraphs is None:
            super().set_font_size(size)
        self.font_size = size
        self._fit_height()

    def _fit_height(self) -> None:
        self._height = fitted_height(self.paragraphs or [""], self.font_size or 18.0, self._width)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.shape_id,
            "name": self.name,
            "left": round(self._left, 2),
            "top": round(self._top, 2),
            "width": round(self._width, 2),
            "height": round(self._height, 2),
        }
        if self.paragraphs is not None:
            payload["text"] = self.text
            payload["font_size"] = self.font_size
        if self.source is not None:
            payload["source"] = str(self.source)
        return payload


class RecordingBackend(SlideBackend):
    def __init__(
        self,
        slide_width: float = 720.0,
        slide_height: float = 540.0,
        *,
        strict_images: bool = True,
    ) -> None:
        super().__init__()
        self._size = (float(slide_width), float(slide_height))
        self.strict_images = strict_images
        self._ids = count(2)

    def slide_size(self) -> Tuple[float, float]:
        return self._size

    def _create_slide(self, index: int) -> SlideHandle:
        return SlideHandle(index=index)

    def _register(self, slide: SlideHandle, shape: RecordedShape) -> RecordedShape:
        slide.shapes.append(shape)
        return shape

    def add_text_box(
        self,
        slide: SlideHandle,
        text: str,
        left: float,
        top: float,
        width: float,
        style: TextStyle = TextStyle(),
    ) -> ShapeHandle:
        shape_id = next(self._ids)
        paragraphs = text.split("\n") if text else []
        shape = RecordedShape(
            shape_id, f"TextBox {shape_id}", left, top, width, 0.0, paragraphs=paragraphs, style=style
        )
        return self._register(slide, shape)

    def add_picture(self, slide: SlideHandle, path: Path) -> ShapeHandle:
        try:
            width, height = picture_size_points(path)
        except OSError:
            if self.strict_images:
                raise
            logger.warning("Cannot read picture %s; assuming %sx%s", path, *DEFAULT_PICTURE_SIZE)
            width, height = DEFAULT_PICTURE_SIZE
        shape_id = next(self._ids)
        shape = RecordedShape(shape_id, f"Picture {shape_id}", 0.0, 0.0, width, height, source=path)
        return self._register(slide, shape)

    def add_media(self, slide: SlideHandle, path: Path) -> ShapeHandle:
        if self.strict_images and not path.is_file():
            raise FileNotFoundError(f"Media file not found: {path}")
        shape_id = next(self._ids)
        shape = RecordedShape(
            shape_id, f"Media {shape_id}", 0.0, 0.0, MEDIA_ICON_SIZE, MEDIA_ICON_SIZE, source=path
        )
        return self._register(slide, shape)

    def _write(self) -> Optional[Path]:
        logger.info("Recorded %d slides", len(self.slides))
        return None

    def summary(self) -> List[Dict[str, Any]]:
        """Plain-data view of the recorded slides."""
        slides: List[Dict[str, Any]] = []
        for slide in self.slides:
            slides.append(
                {
                    "index": slide.index,
                    "transition": slide.transition.value,
                    "advance_on_time": slide.advance_on_time,
                    "advance_time": round(slide.advance_time, 3),
                    "shapes": [shape.to_dict() for shape in slide.shapes if isinstance(shape, RecordedShape)],
                    "effects": [
                        {
                            "shape": effect.shape.shape_id,
                            "kind": effect.kind.value,
                            "exit": effect.exit,
                            "delay": round(effect.timing.delay, 3),
                            "duration": round(effect.timing.duration, 3),
                            "paragraph": effect.paragraph,
                            "by_character": effect.by_character,
                            "motion_path": effect.motion_path,
                            "scale_percent": effect.scale_percent,
                        }
                        for effect in slide.effects
                    ],
                }
            )
        return slides
