"""Helpers for resolving animation and caption configuration."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ImageMotionProfile:
    base_duration: float = 4.0
    zoom_factor: float = 1.05
    cover_threshold: float = 1.2
    slow_scroll_threshold: float = 2.0
    text_duration: float = 0.5
    page_persist: float = 1.0
    transition_duration: float = 1.0


@dataclass(frozen=True)
class TextStyleProfile:
    caption_font_size: float = 24.0
    secondary_font_size: float = 20.0
    debug_font_size: float = 9.0
    color: str = "FFFFFF"


_MOTION_DEFAULTS = ImageMotionProfile()
_TEXT_DEFAULTS = TextStyleProfile()


def _to_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _positive(value: Any, default: float) -> float:
    result = _to_float(value, default)
    return result if result > 0 else default


def _non_negative(value: Any, default: float) -> float:
    result = _to_float(value, default)
    return result if result >= 0 else default


def _section(raw: Dict[str, Any] | None, key: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        return {}
    section = raw.get(key)
    return section if isinstance(section, dict) else {}


def resolve_motion_profile(raw: Dict[str, Any] | None) -> ImageMotionProfile:
    cfg = _section(raw, "animation")
    defaults = _MOTION_DEFAULTS
    return ImageMotionProfile(
        base_duration=_positive(cfg.get("base_duration"), defaults.base_duration),
        zoom_factor=_positive(cfg.get("zoom_factor"), defaults.zoom_factor),
        cover_threshold=_positive(cfg.get("cover_threshold"), defaults.cover_threshold),
        slow_scroll_threshold=_positive(cfg.get("slow_scroll_threshold"), defaults.slow_scroll_threshold),
        text_duration=_non_negative(cfg.get("text_duration"), defaults.text_duration),
        page_persist=_non_negative(cfg.get("page_persist"), defaults.page_persist),
        transition_duration=_non_negative(cfg.get("transition_duration"), defaults.transition_duration),
    )


def resolve_text_profile(raw: Dict[str, Any] | None) -> TextStyleProfile:
    cfg = _section(raw, "text")
    defaults = _TEXT_DEFAULTS
    color = str(cfg.get("color") or defaults.color).lstrip("#").upper()
    if len(color) != 6 or any(ch not in "0123456789ABCDEF" for ch in color):
        color = defaults.color
    return TextStyleProfile(
        caption_font_size=_positive(cfg.get("caption_font_size"), defaults.caption_font_size),
        secondary_font_size=_positive(cfg.get("secondary_font_size"), defaults.secondary_font_size),
        debug_font_size=_positive(cfg.get("debug_font_size"), defaults.debug_font_size),
        color=color,
    )
