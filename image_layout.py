"""Geometry for placing the primary image of a page.

All motion offsets are fractions of the canvas size, which is what relative
motion paths in the presentation format expect.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Tuple

from animation_config import ImageMotionProfile
from closures.models import PrimaryImageAnimation

Size = Tuple[float, float]

_GENTLE_CHOICES = (
    PrimaryImageAnimation.FIT,
    PrimaryImageAnimation.EXPAND,
    PrimaryImageAnimation.SHRINK,
)


@dataclass(frozen=True)
class ScrollPlan:
    left: float
    top: float
    offset: float
    path: str


def is_portrait(image: Size, canvas: Size) -> bool:
    """True when the image is taller than the canvas relative to its width."""
    return image[0] / image[1] < canvas[0] / canvas[1]


def cover_size(image: Size, canvas: Size) -> Size:
    """Scale so the image fills the canvas; the other axis may overflow."""
    width, height = image
    if is_portrait(image, canvas):
        return canvas[0], height * canvas[0] / width
    return width * canvas[1] / height, canvas[1]


def contain_size(image: Size, canvas: Size) -> Size:
    """Scale so the whole image fits inside the canvas."""
    width, height = image
    if is_portrait(image, canvas):
        return width * canvas[1] / height, canvas[1]
    return canvas[0], height * canvas[0] / width


def overflow_ratio(image: Size, canvas: Size) -> float:
    covered = cover_size(image, canvas)
    if is_portrait(image, canvas):
        return covered[1] / canvas[1]
    return covered[0] / canvas[0]


def centered_origin(size: Size, canvas: Size) -> Size:
    return (canvas[0] - size[0]) / 2, (canvas[1] - size[1]) / 2


def format_offset(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def scroll_plan(image: Size, canvas: Size, far: bool) -> ScrollPlan:
    """Position and motion path for scrolling a cover-fitted image.

    "Near" starts with the image's far edge on the canvas and moves it towards
    the viewer's near edge; "far" does the opposite.
    """
    covered = cover_size(image, canvas)
    if is_portrait(image, canvas):
        offset = (covered[1] - canvas[1]) / canvas[1]
        top = 0.0 if far else canvas[1] - covered[1]
        if far:
            offset = -offset
        return ScrollPlan(0.0, top, offset, f"M 0 0 L 0 {format_offset(offset)}")
    offset = (covered[0] - canvas[0]) / canvas[0]
    left = 0.0 if far else canvas[0] - covered[0]
    if far:
        offset = -offset
    return ScrollPlan(left, 0.0, offset, f"M 0 0 L {format_offset(offset)} 0")


def scroll_duration(overflow: float, profile: ImageMotionProfile) -> float:
    if abs(overflow) > profile.slow_scroll_threshold:
        return profile.base_duration * abs(overflow)
    return profile.base_duration


def choose_animation(image: Size, canvas: Size, profile: ImageMotionProfile, rng: random.Random) -> PrimaryImageAnimation:
    """Automatic motion policy for a freshly placed primary image."""
    if overflow_ratio(image, canvas) < profile.cover_threshold:
        return rng.choice(_GENTLE_CHOICES)
    if is_portrait(image, canvas):
        return PrimaryImageAnimation.SCROLL_NEAR
    return PrimaryImageAnimation.SCROLL_FAR
