"""python-pptx implementation of the slide backend."""
from __future__ import annotations

import mimetypes
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

from lxml import etree
from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_AUTO_SIZE, PP_ALIGN
from pptx.oxml.ns import qn
from pptx.oxml.xmlchemy import OxmlElement
from pptx.util import Emu, Inches, Pt

from logging_utils import get_logger

from ..base import ShapeHandle, SlideBackend, SlideHandle, TextStyle
from ..text_metrics import fitted_height
from .timing import build_timing, replace_slide_children
from .transitions import build_transition

logger = get_logger(__name__)

MEDIA_ICON_SIZE = Pt(48)
OUTLINE_WIDTH = Pt(1)


def _apply_run_style(run, style: TextStyle) -> None:
    font = run.font
    font.size = Pt(style.font_size)
    font.bold = style.bold
    font.color.rgb = RGBColor.from_string(style.color)
    rPr = run._r.get_or_add_rPr()
    if style.outline:
        ln = OxmlElement("a:ln")
        ln.set("w", str(int(OUTLINE_WIDTH)))
        fill = etree.SubElement(ln, qn("a:solidFill"))
        etree.SubElement(fill, qn("a:srgbClr"), val="000000")
        rPr.insert(0, ln)
    if style.shadow:
        effect_lst = OxmlElement("a:effectLst")
        shadow = etree.SubElement(
            effect_lst, qn("a:outerShdw"), blurRad="38100", dist="38100", dir="2700000", algn="tl"
        )
        color = etree.SubElement(shadow, qn("a:srgbClr"), val="000000")
        etree.SubElement(color, qn("a:alpha"), val="100000")
        solid_fill = rPr.find(qn("a:solidFill"))
        if solid_fill is not None:
            solid_fill.addnext(effect_lst)
        else:
            rPr.append(effect_lst)


class PptxShape(ShapeHandle):
    def __init__(self, shape, style: Optional[TextStyle] = None) -> None:
        self._shape = shape
        self.shape_id = shape.shape_id
        self.name = shape.name
        self.style = style

    @property
    def native(self):
        return self._shape

    @property
    def left(self) -> float:
        return Emu(self._shape.left).pt

    @left.setter
    def left(self, value: float) -> None:
        self._shape.left = Pt(value)

    @property
    def top(self) -> float:
        return Emu(self._shape.top).pt

    @top.setter
    def top(self, value: float) -> None:
        self._shape.top = Pt(value)

    @property
    def width(self) -> float:
        return Emu(self._shape.width).pt

    @width.setter
    def width(self, value: float) -> None:
        self._shape.width = Pt(value)

    @property
    def height(self) -> float:
        return Emu(self._shape.height).pt

    @height.setter
    def height(self, value: float) -> None:
        self._shape.height = Pt(value)

    def _require_text(self):
        if self.style is None or not self._shape.has_text_frame:
            raise NotImplementedError(f"{self.name} does not hold text")
        return self._shape.text_frame

    @property
    def text(self) -> str:
        if not self._shape.has_text_frame:
            return ""
        return "\n".join(paragraph.text for paragraph in self._shape.text_frame.paragraphs)

    @property
    def paragraph_count(self) -> int:
        if not self.has_text:
            return 0
        return len(self._shape.text_frame.paragraphs)

    def _paragraph_texts(self) -> List[str]:
        return [paragraph.text for paragraph in self._shape.text_frame.paragraphs]

    def _write_paragraph(self, paragraph, text: str) -> None:
        paragraph.alignment = PP_ALIGN.CENTER if self.style.centered else PP_ALIGN.LEFT
        run = paragraph.add_run()
        run.text = text
        _apply_run_style(run, self.style)

    def append_text(self, text: str) -> None:
        frame = self._require_text()
        lines = text.split("\n")
        if self.has_text:
            targets = [frame.add_paragraph() for _ in lines]
        else:
            targets = [frame.paragraphs[0]] + [frame.add_paragraph() for _ in lines[1:]]
        for paragraph, line in zip(targets, lines):
            self._write_paragraph(paragraph, line)
        self.fit_height()

    def set_font_size(self, size: float) -> None:
        frame = self._require_text()
        self.style = replace(self.style, font_size=float(size))
        for paragraph in frame.paragraphs:
            for run in paragraph.runs:
                run.font.size = Pt(size)
        self.fit_height()

    def fit_height(self) -> None:
        self.height = fitted_height(self._paragraph_texts(), self.style.font_size, self.width)


class PptxBackend(SlideBackend):
    def __init__(
        self,
        output_path: Path,
        *,
        template: Optional[Path] = None,
        slide_width_in: Optional[float] = None,
        slide_height_in: Optional[float] = None,
    ) -> None:
        super().__init__()
        self.output_path = Path(output_path)
        self.presentation = Presentation(str(template)) if template else Presentation()
        if slide_width_in and slide_height_in:
            self.presentation.slide_width = Inches(slide_width_in)
            self.presentation.slide_height = Inches(slide_height_in)
        self._layout = self._blank_layout()

    def _blank_layout(self):
        layouts = list(self.presentation.slide_layouts)
        for layout in layouts:
            if layout.name.lower() == "blank":
                return layout
        return min(layouts, key=lambda layout: len(layout.placeholders))

    def slide_size(self) -> Tuple[float, float]:
        return Emu(self.presentation.slide_width).pt, Emu(self.presentation.slide_height).pt

    def _create_slide(self, index: int) -> SlideHandle:
        native = self.presentation.slides.add_slide(self._layout)
        for placeholder in list(native.placeholders):
            placeholder._element.getparent().remove(placeholder._element)
        return SlideHandle(index=index, native=native)

    def add_text_box(
        self,
        slide: SlideHandle,
        text: str,
        left: float,
        top: float,
        width: float,
        style: TextStyle = TextStyle(),
    ) -> ShapeHandle:
        native = slide.native.shapes.add_textbox(Pt(left), Pt(top), Pt(width), Pt(100))
        frame = native.text_frame
        frame.auto_size = MSO_AUTO_SIZE.SHAPE_TO_FIT_TEXT
        frame.word_wrap = style.word_wrap
        shape = PptxShape(native, style)
        if text:
            shape.append_text(text)
        else:
            shape.fit_height()
        slide.shapes.append(shape)
        return shape

    def add_picture(self, slide: SlideHandle, path: Path) -> ShapeHandle:
        native = slide.native.shapes.add_picture(str(path), 0, 0)
        shape = PptxShape(native)
        slide.shapes.append(shape)
        return shape

    def add_media(self, slide: SlideHandle, path: Path) -> ShapeHandle:
        mime_type = mimetypes.guess_type(str(path))[0] or "video/unknown"
        native = slide.native.shapes.add_movie(
            str(path), 0, 0, MEDIA_ICON_SIZE, MEDIA_ICON_SIZE, mime_type=mime_type
        )
        shape = PptxShape(native)
        slide.shapes.append(shape)
        return shape

    def _write(self) -> Optional[Path]:
        for slide in self.slides:
            elements = [
                element
                for element in (build_transition(slide), build_timing(slide))
                if element is not None
            ]
            replace_slide_children(slide.native._element, elements)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.presentation.save(str(self.output_path))
        logger.info("Saved %d slides to %s", len(self.slides), self.output_path)
        return self.output_path
