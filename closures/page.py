"""Page scope: one slide, its primary image and caption, and its animations."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple

import image_layout
from closures.models import AnimationOptions, EffectKind, PrimaryImageAnimation, TransitionKind
from logging_utils import get_logger
from slide_backends.base import EffectHandle, ShapeHandle, SlideHandle, TextStyle
from timeline_builder import AnimationInfo, AnimationTimeline

from .base import STAY, Closure, Outcome, Param, descend_to, operation
from .text import TextScope

if TYPE_CHECKING:  # pragma: no cover
    from .document import DocumentScope

logger = get_logger(__name__)

DEFAULT_STOP_AFTER_SLIDES = 999


class PageScope(Closure):
    kind = "page"

    def __init__(self, document: "DocumentScope", slide: SlideHandle) -> None:
        super().__init__(document)
        self.document = document
        self.slide = slide
        self.primary_image: Optional[ShapeHandle] = None
        self.primary_text_box: Optional[ShapeHandle] = None
        self.primary_image_duration = document.motion_profile.base_duration
        self.primary_image_animation_kind: Optional[PrimaryImageAnimation] = None
        self.page_persist_time = document.motion_profile.page_persist
        self.timeline = AnimationTimeline()
        self.texts: list[TextScope] = []
        self._primary_effect: Optional[EffectHandle] = None
        self._image_size: Optional[Tuple[float, float]] = None

    @property
    def backend(self):
        return self.document.backend

    @property
    def animations(self) -> list[AnimationInfo]:
        return self.timeline.animations

    def initialize(self, image_path: Optional[Path], primary_text: str) -> None:
        profile = self.document.motion_profile
        entry = self.document.transition_pool.random_transition(self.document.rng)
        self.backend.set_transition(self.slide, entry, profile.transition_duration)

        if image_path is not None:
            self.primary_image = self.backend.add_picture(self.slide, image_path)
            self._image_size = (self.primary_image.width, self.primary_image.height)
            choice = image_layout.choose_animation(
                self._image_size, self.document.canvas, profile, self.document.rng
            )
            self.image_animation(choice)
            if self.document.is_debug:
                self._add_debug_label(str(image_path))

        if primary_text:
            self.primary_text_box = self.create_text_box(primary_text)
            self.primary_text_box.top = self.document.slide_height - self.primary_text_box.height

        logger.info(
            "Page %d: image=%s caption=%s transition=%s",
            self.slide.index,
            image_path.name if image_path else "-",
            "yes" if primary_text else "no",
            entry.value,
        )

    def caption_style(self, font_size: Optional[float] = None) -> TextStyle:
        text_profile = self.document.text_profile
        return TextStyle(
            font_size=font_size or text_profile.caption_font_size,
            color=text_profile.color,
        )

    def create_text_box(self, content: str, top: float = 0.0, font_size: Optional[float] = None) -> ShapeHandle:
        return self.backend.add_text_box(
            self.slide, content, 0.0, top, self.document.slide_width, self.caption_style(font_size)
        )

    def _add_debug_label(self, text: str) -> None:
        style = TextStyle(
            font_size=self.document.text_profile.debug_font_size,
            bold=False,
            shadow=False,
            outline=False,
            centered=False,
            word_wrap=False,
        )
        self.backend.add_text_box(self.slide, text, 0.0, 0.0, 50.0, style)

    def add_animation(
        self,
        shape: ShapeHandle,
        effect: EffectKind,
        delay: float,
        duration: float,
        options: AnimationOptions = AnimationOptions.NONE,
    ) -> AnimationInfo:
        return self.timeline.register(self.backend, self.slide, shape, effect, delay, duration, options)

    # primary image -----------------------------------------------------

    def _align_image(self, allow_crop: bool, align_center: bool) -> None:
        canvas = self.document.canvas
        if allow_crop:
            width, height = image_layout.cover_size(self._image_size, canvas)
        else:
            width, height = image_layout.contain_size(self._image_size, canvas)
        self.primary_image.resize(width, height)
        if align_center:
            self.primary_image.left, self.primary_image.top = image_layout.centered_origin((width, height), canvas)
        else:
            self.primary_image.left = 0.0
            self.primary_image.top = 0.0

    def _substitute_primary_effect(self, kind: Optional[EffectKind]) -> Optional[EffectHandle]:
        if self._primary_effect is not None:
            self.backend.remove_effect(self.slide, self._primary_effect)
            self._primary_effect = None
        if kind is None:
            return None
        effect = self.backend.add_effect(self.slide, self.primary_image, kind, index=0)
        effect.timing.delay = 0.0
        effect.timing.duration = self.primary_image_duration
        effect.timing.smooth_end = True
        self._primary_effect = effect
        return effect

    @operation("imageanimation", Param("animation", PrimaryImageAnimation))
    def image_animation(self, animation: PrimaryImageAnimation) -> Outcome:
        if self.primary_image is None:
            return STAY
        profile = self.document.motion_profile
        if animation is PrimaryImageAnimation.EXPAND_OR_SHRINK:
            animation = self.document.rng.choice((PrimaryImageAnimation.EXPAND, PrimaryImageAnimation.SHRINK))

        self.primary_image_duration = profile.base_duration
        if animation is PrimaryImageAnimation.NONE:
            self._align_image(allow_crop=False, align_center=True)
            self._substitute_primary_effect(None)
        elif animation is PrimaryImageAnimation.FIT:
            self._align_image(allow_crop=True, align_center=True)
            self._substitute_primary_effect(None)
        elif animation is PrimaryImageAnimation.EXPAND:
            self._align_image(allow_crop=True, align_center=True)
            effect = self._substitute_primary_effect(EffectKind.GROW_SHRINK)
            effect.add_scale(profile.zoom_factor * 100)
        elif animation is PrimaryImageAnimation.SHRINK:
            self._align_image(allow_crop=True, align_center=True)
            self.primary_image.scale_from_center(profile.zoom_factor)
            effect = self._substitute_primary_effect(EffectKind.GROW_SHRINK)
            effect.add_scale(100 / profile.zoom_factor)
        else:
            canvas = self.document.canvas
            far = animation is PrimaryImageAnimation.SCROLL_FAR
            plan = image_layout.scroll_plan(self._image_size, canvas, far)
            self._align_image(allow_crop=True, align_center=False)
            self.primary_image.left = plan.left
            self.primary_image.top = plan.top
            overflow = image_layout.overflow_ratio(self._image_size, canvas)
            self.primary_image_duration = image_layout.scroll_duration(overflow, profile)
            effect = self._substitute_primary_effect(EffectKind.CUSTOM)
            effect.add_motion(plan.path)
        self.primary_image_animation_kind = animation
        logger.debug(
            "Page %d primary image animation %s (%.2fs)",
            self.slide.index,
            animation.value,
            self.primary_image_duration,
        )
        return STAY

    # script operations -------------------------------------------------

    @operation("text", Param("text", str, ""))
    def text(self, text: str) -> Outcome:
        scope = TextScope(self, self.create_text_box(text))
        self.texts.append(scope)
        return descend_to(scope)

    @operation("subtitle2", Param("text", str, ""))
    def subtitle2(self, text: str) -> Outcome:
        scope = TextScope(self, self.create_text_box(text))
        scope.font_size(self.document.text_profile.secondary_font_size)
        scope.bottom(0.0)
        self.texts.append(scope)
        return descend_to(scope)

    @operation("persist", Param("persist_time", float))
    def persist(self, persist_time: float) -> Outcome:
        self.page_persist_time = persist_time
        return STAY

    @operation("transition", Param("effect", TransitionKind, TransitionKind.NONE))
    def transition(self, effect: TransitionKind) -> Outcome:
        self.backend.set_transition(self.slide, effect)
        return STAY

    @operation("music", Param("path", str, ""), Param("stop_after_slides", int, DEFAULT_STOP_AFTER_SLIDES))
    def music(self, path: str, stop_after_slides: int) -> Outcome:
        media = self.backend.add_media(self.slide, self.document.resolve(path))
        effect = self.backend.add_effect(self.slide, media, EffectKind.MEDIA_PLAY)
        effect.timing.delay = 0.0
        effect.timing.duration = 0.0
        effect.media_stop_after_slides = stop_after_slides
        # Keep the media icon off the canvas.
        media.left = -media.width
        media.top = -media.height
        return STAY

    @property
    def advance_time(self) -> float:
        return max(self.primary_image_duration, self.timeline.latest_end) + self.page_persist_time

    def on_leave(self) -> None:
        advance = self.advance_time
        self.backend.set_advance(self.slide, advance)
        logger.info(
            "Page %d: %d animations, advances after %.2fs",
            self.slide.index,
            len(self.timeline.animations),
            advance,
        )
