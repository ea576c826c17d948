"""Backend contract used by the album interpreter.

Geometry is expressed in points. Slides keep their animation main sequence as
a list of :class:`EffectHandle` objects; concrete backends turn that list into
their own representation when :meth:`SlideBackend.finalize` is called.
"""
from __future__ import annotations

import abc
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, List, Optional, Tuple

from closures.models import EffectKind, TransitionKind
from logging_utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TextStyle:
    font_size: float = 24.0
    bold: bool = True
    shadow: bool = True
    outline: bool = True
    centered: bool = True
    word_wrap: bool = True
    color: str = "FFFFFF"


@dataclass
class EffectTiming:
    delay: float = 0.0
    duration: float = 0.5
    smooth_end: bool = False


class ShapeHandle(abc.ABC):
    """A shape placed on a slide."""

    shape_id: int
    name: str

    @property
    @abc.abstractmethod
    def left(self) -> float: ...

    @left.setter
    @abc.abstractmethod
    def left(self, value: float) -> None: ...

    @property
    @abc.abstractmethod
    def top(self) -> float: ...

    @top.setter
    @abc.abstractmethod
    def top(self, value: float) -> None: ...

    @property
    @abc.abstractmethod
    def width(self) -> float: ...

    @width.setter
    @abc.abstractmethod
    def width(self, value: float) -> None: ...

    @property
    @abc.abstractmethod
    def height(self) -> float: ...

    @height.setter
    @abc.abstractmethod
    def height(self, value: float) -> None: ...

    @property
    def text(self) -> str:
        return ""

    @property
    def has_text(self) -> bool:
        return bool(self.text)

    @property
    def paragraph_count(self) -> int:
        return len(self.text.split("\n")) if self.text else 0

    def append_text(self, text: str) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not hold text")

    def set_font_size(self, size: float) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not hold text")

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def scale_from_center(self, ratio: float) -> None:
        """Scale the shape by ``ratio`` around its own centre."""
        self.left -= self.width * (ratio - 1) / 2
        self.top -= self.height * (ratio - 1) / 2
        self.resize(self.width * ratio, self.height * ratio)


@dataclass(eq=False)
class EffectHandle:
    shape: ShapeHandle
    kind: EffectKind
    exit: bool = False
    timing: EffectTiming = field(default_factory=EffectTiming)
    by_character: bool = False
    paragraph: Optional[int] = None
    motion_path: Optional[str] = None
    scale_percent: Optional[float] = None
    media_stop_after_slides: Optional[int] = None

    @property
    def build_by_paragraph(self) -> bool:
        return self.paragraph is not None

    def add_motion(self, path: str) -> None:
        self.motion_path = path

    def add_scale(self, percent: float) -> None:
        self.scale_percent = percent


@dataclass(eq=False)
class SlideHandle:
    index: int
    effects: List[EffectHandle] = field(default_factory=list)
    shapes: List[ShapeHandle] = field(default_factory=list)
    transition: TransitionKind = TransitionKind.NONE
    transition_duration: float = 1.0
    advance_on_time: bool = False
    advance_time: float = 0.0
    native: Any = None


class SlideBackend(abc.ABC):
    """Presentation-authoring collaborator driven by the interpreter."""

    def __init__(self) -> None:
        self.slides: List[SlideHandle] = []
        self.finalized = False

    @abc.abstractmethod
    def slide_size(self) -> Tuple[float, float]:
        """Return ``(width, height)`` of the canvas in points."""

    @abc.abstractmethod
    def _create_slide(self, index: int) -> SlideHandle: ...

    @abc.abstractmethod
    def add_text_box(
        self,
        slide: SlideHandle,
        text: str,
        left: float,
        top: float,
        width: float,
        style: TextStyle = TextStyle(),
    ) -> ShapeHandle: ...

    @abc.abstractmethod
    def add_picture(self, slide: SlideHandle, path: Path) -> ShapeHandle:
        """Place a picture at the origin with its native size."""

    @abc.abstractmethod
    def add_media(self, slide: SlideHandle, path: Path) -> ShapeHandle: ...

    @abc.abstractmethod
    def _write(self) -> Optional[Path]: ...

    def add_slide(self) -> SlideHandle:
        slide = self._create_slide(len(self.slides) + 1)
        self.slides.append(slide)
        logger.debug("Added slide %d", slide.index)
        return slide

    def add_effect(
        self,
        slide: SlideHandle,
        shape: ShapeHandle,
        kind: EffectKind,
        *,
        exit: bool = False,
        index: Optional[int] = None,
    ) -> EffectHandle:
        effect = EffectHandle(shape=shape, kind=kind, exit=exit)
        if index is None:
            slide.effects.append(effect)
        else:
            slide.effects.insert(index, effect)
        return effect

    def remove_effect(self, slide: SlideHandle, effect: EffectHandle) -> None:
        slide.effects.remove(effect)

    def split_by_character(self, slide: SlideHandle, effect: EffectHandle) -> EffectHandle:
        effect.by_character = True
        return effect

    def split_by_paragraph(self, slide: SlideHandle, effect: EffectHandle) -> EffectHandle:
        """Replace ``effect`` with one sub-effect per paragraph; return the first."""
        position = slide.effects.index(effect)
        count = max(effect.shape.paragraph_count, 1)
        units = [
            replace(effect, timing=replace(effect.timing), paragraph=number)
            for number in range(count)
        ]
        slide.effects[position:position + 1] = units
        return units[0]

    def set_transition(self, slide: SlideHandle, kind: TransitionKind, duration: Optional[float] = None) -> None:
        slide.transition = kind
        if duration is not None:
            slide.transition_duration = duration

    def set_advance(self, slide: SlideHandle, seconds: float) -> None:
        slide.advance_on_time = True
        slide.advance_time = seconds

    def finalize(self) -> Optional[Path]:
        result = self._write()
        self.finalized = True
        return result
