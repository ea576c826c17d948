"""Animation timeline for a single page.

Every animation registered on a page is scheduled in absolute seconds from the
moment the slide appears. The backend effects are all triggered "with
previous" and carry their absolute start as a trigger delay, so the order in
which effects are registered is the order in which they are laid out.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence

from closures.models import AnimationOptions, EffectKind
from logging_utils import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from slide_backends.base import EffectHandle, EffectTiming, ShapeHandle, SlideBackend, SlideHandle

logger = get_logger(__name__)


@dataclass
class AnimationInfo:
    start_at: float
    duration: float
    effect: Optional["EffectHandle"] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"Animation duration must not be negative (got {self.duration})")

    @property
    def end_at(self) -> float:
        return self.start_at + self.duration

    def apply_timing(self, timing: "EffectTiming") -> None:
        timing.delay = self.start_at
        timing.duration = self.duration

    def distribute(self, timings: Sequence["EffectTiming"]) -> None:
        """Lay sub-unit timings end to end, then widen this animation to cover them."""
        unit = self.duration
        last_end = self.start_at
        for timing in timings:
            timing.delay = last_end
            timing.duration = unit
            last_end += unit
        if timings:
            self.duration = last_end - self.start_at


class AnimationTimeline:
    """Accumulates the animations of one page in registration order."""

    def __init__(self) -> None:
        self.animations: List[AnimationInfo] = []

    @property
    def last(self) -> Optional[AnimationInfo]:
        return self.animations[-1] if self.animations else None

    @property
    def latest_end(self) -> float:
        last = self.last
        return last.end_at if last is not None else 0.0

    def base_time(self, options: AnimationOptions) -> float:
        last = self.last
        if last is None:
            return 0.0
        # Sequential unless WITH_PREVIOUS asks to start alongside the previous one.
        if options & AnimationOptions.WITH_PREVIOUS:
            return last.start_at
        return last.end_at

    def register(
        self,
        backend: "SlideBackend",
        slide: "SlideHandle",
        shape: "ShapeHandle",
        effect: EffectKind,
        delay: float,
        duration: float,
        options: AnimationOptions = AnimationOptions.NONE,
    ) -> AnimationInfo:
        info = AnimationInfo(self.base_time(options) + delay, duration)
        handle = backend.add_effect(
            slide,
            shape,
            effect,
            exit=bool(options & AnimationOptions.EXIT),
        )
        info.apply_timing(handle.timing)
        info.effect = handle

        if options & AnimationOptions.BY_CHARACTER:
            handle = backend.split_by_character(slide, handle)

        if options & AnimationOptions.BY_PARAGRAPH:
            first = backend.split_by_paragraph(slide, handle)
            info.effect = first
            units = self._paragraph_run(slide, first, shape)
            info.distribute([unit.timing for unit in units])
            logger.debug(
                "Split %s animation into %d paragraph units (%.2fs -> %.2fs)",
                effect.value,
                len(units),
                info.start_at,
                info.end_at,
            )

        self.animations.append(info)
        return info

    @staticmethod
    def _paragraph_run(slide: "SlideHandle", first: "EffectHandle", shape: "ShapeHandle") -> List["EffectHandle"]:
        # The split puts the sub-effects next to each other starting at the first one.
        run: List["EffectHandle"] = []
        for candidate in slide.effects[slide.effects.index(first):]:
            if candidate.shape is not shape or not candidate.build_by_paragraph:
                break
            run.append(candidate)
        return run
