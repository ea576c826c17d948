"""Root scope of an album script."""
from __future__ import annotations

import random
from pathlib import Path
from typing import Optional

from animation_config import ImageMotionProfile, TextStyleProfile
from logging_utils import get_logger
from slide_backends.base import SlideBackend

from .base import STAY, Closure, Outcome, Param, descend_to, operation
from .page import PageScope
from .transition_pool import TransitionPoolScope

logger = get_logger(__name__)


class DocumentScope(Closure):
    kind = "document"

    def __init__(
        self,
        backend: SlideBackend,
        *,
        work_path: Path | str = ".",
        motion_profile: ImageMotionProfile = ImageMotionProfile(),
        text_profile: TextStyleProfile = TextStyleProfile(),
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(None)
        self.backend = backend
        self.work_path = Path(work_path)
        self.is_debug = False
        self.motion_profile = motion_profile
        self.text_profile = text_profile
        self.rng = rng or random.Random()
        # Canvas size is read once and treated as constant for the run.
        self.slide_width, self.slide_height = backend.slide_size()
        self.transition_pool = TransitionPoolScope(self)
        self.pages: list[PageScope] = []

    @property
    def canvas(self) -> tuple[float, float]:
        return self.slide_width, self.slide_height

    def resolve(self, path: str) -> Path:
        return self.work_path / path

    @operation("dir", Param("path", str))
    def dir(self, path: str) -> Outcome:
        self.work_path = self.work_path / path
        logger.debug("Working directory is now %s", self.work_path)
        return STAY

    @operation("debug", Param("value", bool, True))
    def debug(self, value: bool) -> Outcome:
        self.is_debug = value
        return STAY

    @operation("page", Param("image_path", str, ""), Param("primary_text", str, ""))
    def page(self, image_path: str, primary_text: str) -> Outcome:
        slide = self.backend.add_slide()
        page = PageScope(self, slide)
        page.initialize(self.resolve(image_path) if image_path else None, primary_text)
        self.pages.append(page)
        return descend_to(page)

    @operation("transitions")
    def transitions(self) -> Outcome:
        return descend_to(self.transition_pool)
