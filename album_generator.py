"""Indentation-driven interpreter for album scripts.

Scopes are kept on a stack of frames. Each line first closes every scope whose
opening line was indented at least as deep as itself, then runs its command
in the scope left on top. Commands that open a child scope push a new frame.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from animation_config import ImageMotionProfile, TextStyleProfile
from closures.base import Closure
from closures.document import DocumentScope
from closures.errors import AlbumScriptError, BackendError, MalformedLineError
from logging_utils import get_logger
from script_parser import Instruction, iter_instructions, read_script_lines
from slide_backends.base import SlideBackend

logger = get_logger(__name__)

ROOT_INDENTATION = -1


@dataclass
class _Frame:
    indentation: int
    scope: Closure
    body_indentation: Optional[int] = None


@dataclass
class AlbumResult:
    document: DocumentScope
    output_path: Optional[Path]
    page_count: int
    animation_count: int


class AlbumGenerator:
    """Runs an album script against a slide backend."""

    def __init__(
        self,
        backend: SlideBackend,
        *,
        work_path: Path | str = ".",
        motion_profile: ImageMotionProfile = ImageMotionProfile(),
        text_profile: TextStyleProfile = TextStyleProfile(),
        seed: Optional[int] = None,
        debug: bool = False,
    ) -> None:
        self.backend = backend
        self.work_path = Path(work_path)
        self.motion_profile = motion_profile
        self.text_profile = text_profile
        self.seed = seed
        self.debug = debug

    def _new_document(self, work_path: Path) -> DocumentScope:
        document = DocumentScope(
            self.backend,
            work_path=work_path,
            motion_profile=self.motion_profile,
            text_profile=self.text_profile,
            rng=random.Random(self.seed),
        )
        document.is_debug = self.debug
        return document

    def generate(self, lines: Iterable[str], work_path: Path | str | None = None) -> AlbumResult:
        document = self._new_document(Path(work_path) if work_path is not None else self.work_path)
        stack: List[_Frame] = [_Frame(ROOT_INDENTATION, document)]

        current: Optional[Instruction] = None
        try:
            for instruction in iter_instructions(lines):
                current = instruction
                self._execute(stack, instruction)
        except AlbumScriptError as exc:
            if current is not None:
                exc.attach_line(current.line_number, current.text)
            logger.error("Script aborted: %s", exc)
            raise
        except (OSError, ValueError) as exc:
            error = BackendError(f"{type(exc).__name__}: {exc}")
            if current is not None:
                error.attach_line(current.line_number, current.text)
            logger.error("Script aborted: %s", error)
            raise error from exc

        # End of input closes every open scope, the document included.
        while stack:
            stack.pop().scope.leave()
        output_path = self.backend.finalize()

        result = AlbumResult(
            document=document,
            output_path=output_path,
            page_count=len(document.pages),
            animation_count=sum(len(page.animations) for page in document.pages),
        )
        logger.info("Album finished: %d pages, %d animations", result.page_count, result.animation_count)
        return result

    def generate_from_file(self, path: Path | str, work_path: Path | str | None = None) -> AlbumResult:
        script_path = Path(path).expanduser().resolve()
        lines = read_script_lines(script_path)
        return self.generate(lines, work_path if work_path is not None else script_path.parent)

    def _execute(self, stack: List[_Frame], instruction: Instruction) -> None:
        logger.debug("%4d: %s", instruction.line_number, instruction.text)

        while instruction.indentation <= stack[-1].indentation:
            frame = stack.pop()
            frame.scope.leave()

        top = stack[-1]
        if top.body_indentation is None:
            top.body_indentation = instruction.indentation
        elif instruction.indentation != top.body_indentation:
            raise MalformedLineError(
                f"inconsistent indentation: expected {top.body_indentation} in {top.scope.kind} scope, "
                f"got {instruction.indentation}"
            )

        outcome = top.scope.invoke(instruction.command, instruction.parameters)
        if outcome.descends:
            logger.debug("Entering %s scope", outcome.child.kind)
            stack.append(_Frame(instruction.indentation, outcome.child))
