"""Text scope: positioning, styling and animating one text box."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from slide_backends.base import EffectHandle, ShapeHandle

from .base import STAY, Closure, Outcome, Param, operation
from .models import AnimationOptions, EffectKind

if TYPE_CHECKING:  # pragma: no cover
    from .document import DocumentScope
    from .page import PageScope


class TextScope(Closure):
    kind = "text"

    def __init__(self, page: "PageScope", text_box: ShapeHandle) -> None:
        super().__init__(page)
        self.page = page
        self.document: "DocumentScope" = page.document
        self.text_box = text_box
        self.enter_animation: Optional[EffectHandle] = None

    @operation("left", Param("value", float, 0.0))
    def left(self, value: float) -> Outcome:
        self.text_box.left = value * self.document.slide_width
        return STAY

    @operation("top", Param("value", float, 0.0))
    def top(self, value: float) -> Outcome:
        self.text_box.top = value * self.document.slide_height
        return STAY

    @operation("bottom", Param("value", float, 0.0))
    def bottom(self, value: float) -> Outcome:
        # Stack above the primary caption when there is one.
        caption = self.page.primary_text_box
        caption_height = caption.height if caption is not None else 0.0
        self.text_box.top = (
            self.document.slide_height - caption_height - self.text_box.height + value * self.document.slide_height
        )
        return STAY

    @operation("vcenter", Param("offset", float, 0.0))
    def vcenter(self, offset: float) -> Outcome:
        self.text_box.top = (self.document.slide_height - self.text_box.height) / 2 + offset * self.document.slide_height
        return STAY

    @operation(
        "animation",
        Param("effect", EffectKind, EffectKind.FADE),
        Param("options", AnimationOptions, AnimationOptions.NONE),
        Param("delay", float, 0.0, minimum=0.0),
    )
    def animation(self, effect: EffectKind, options: AnimationOptions, delay: float) -> Outcome:
        duration = self.document.motion_profile.text_duration
        info = self.page.add_animation(self.text_box, effect, delay, duration, options)
        if self.enter_animation is None and not options & AnimationOptions.EXIT:
            self.enter_animation = info.effect
        return STAY

    @operation("fontsize", Param("size", float, 24.0))
    def font_size(self, size: float) -> Outcome:
        self.text_box.set_font_size(size)
        return STAY

    @operation("paragraph", Param("text", str, ""))
    def paragraph(self, text: str) -> Outcome:
        self.text_box.append_text(text)
        return STAY
