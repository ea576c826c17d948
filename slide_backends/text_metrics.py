"""Text measurement helpers for auto-sized text boxes."""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional, Sequence

from PIL import ImageFont

LINE_SPACING = 1.2
# Default inner margins of a PowerPoint text box (0.1in left/right, 0.05in top/bottom).
HORIZONTAL_INSET = 14.4
VERTICAL_INSET = 7.2


@lru_cache(maxsize=32)
def _load_font(size: int, font_path: Optional[str] = None):
    if font_path:
        return ImageFont.truetype(font_path, size)
    return ImageFont.load_default(size=size)


def measure_width(text: str, font_size: float, font_path: Optional[str] = None) -> float:
    font = _load_font(max(1, int(round(font_size))), font_path)
    return float(font.getlength(text))


def wrap_text(text: str, font_size: float, max_width: float, font_path: Optional[str] = None) -> List[str]:
    # Character-level wrapping so text without spaces still breaks.
    parts: List[str] = []
    buffer = ""
    for char in text:
        candidate = buffer + char
        if measure_width(candidate, font_size, font_path) <= max_width:
            buffer = candidate
            continue
        if buffer:
            parts.append(buffer)
            buffer = char
        else:
            parts.append(candidate)
            buffer = ""
    if buffer:
        parts.append(buffer)
    return parts or [text]


def count_lines(paragraphs: Sequence[str], font_size: float, box_width: float, font_path: Optional[str] = None) -> int:
    usable = max(box_width - HORIZONTAL_INSET, font_size)
    total = 0
    for paragraph in paragraphs:
        if not paragraph:
            total += 1
            continue
        total += len(wrap_text(paragraph, font_size, usable, font_path))
    return max(total, 1)


def fitted_height(paragraphs: Sequence[str], font_size: float, box_width: float, font_path: Optional[str] = None) -> float:
    """Height of a shape-to-fit text box holding ``paragraphs``."""
    lines = count_lines(paragraphs, font_size, box_width, font_path)
    return lines * font_size * LINE_SPACING + 2 * VERTICAL_INSET
