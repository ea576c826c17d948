"""Slide backends the interpreter writes into."""
from .base import EffectHandle, EffectTiming, ShapeHandle, SlideBackend, SlideHandle, TextStyle

__all__ = [
    "EffectHandle",
    "EffectTiming",
    "ShapeHandle",
    "SlideBackend",
    "SlideHandle",
    "TextStyle",
]
