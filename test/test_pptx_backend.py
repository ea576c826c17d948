from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from PIL import Image
from pptx import Presentation
from pptx.oxml.ns import qn

from album_generator import AlbumGenerator
from closures.models import EffectKind, TransitionKind
from slide_backends.base import SlideHandle
from slide_backends.pptx.backend import PptxBackend
from slide_backends.pptx.timing import preset_for
from slide_backends.pptx.transitions import build_transition, speed_for, transition_element_for


def _build(tmp_path: Path, script: list[str]) -> Path:
    output = tmp_path / "out" / "album.pptx"
    backend = PptxBackend(output)
    AlbumGenerator(backend, seed=11).generate(script, work_path=tmp_path)
    assert output.exists()
    return output


def test_album_is_saved_with_timing_and_transition(tmp_path: Path) -> None:
    Image.new("RGB", (720, 1890), (10, 20, 30)).save(tmp_path / "tall.png")
    output = _build(
        tmp_path,
        [
            "PAGE\ttall.png\tHello",
            "  TRANSITION\tFade",
            "  TEXT\tone|two",
            "    ANIMATION\tFade\tByParagraph",
        ],
    )

    slide = Presentation(str(output)).slides[0]
    element = slide._element

    transition = element.find(qn("p:transition"))
    assert transition is not None
    assert transition.find(qn("p:fade")) is not None
    # Scroll of a 3.5x overflow image: 4s * 3.5 plus one second of persistence.
    assert transition.get("advTm") == "15000"

    timing = element.find(qn("p:timing"))
    assert timing is not None
    motions = timing.findall(".//" + qn("p:animMotion"))
    assert len(motions) == 1
    assert motions[0].get("path") == "M 0 0 L 0 2.5 E"

    paragraph_targets = timing.findall(".//" + qn("p:pRg"))
    # Each paragraph unit targets its paragraph from both the visibility set and the fade.
    assert [target.get("st") for target in paragraph_targets] == ["0", "0", "1", "1"]
    builds = timing.findall(qn("p:bldLst") + "/" + qn("p:bldP"))
    assert len(builds) == 1
    assert builds[0].get("build") == "p"


def test_slide_without_effects_only_gets_a_transition(tmp_path: Path) -> None:
    output = _build(tmp_path, ["TRANSITIONS", "  CLEAR", "PAGE\t\tcaption"])
    element = Presentation(str(output)).slides[0]._element

    assert element.find(qn("p:timing")) is None
    transition = element.find(qn("p:transition"))
    assert transition.get("advTm") == "5000"
    assert len(transition) == 0


def test_text_is_written_as_paragraph_runs(tmp_path: Path) -> None:
    output = _build(tmp_path, ["PAGE\t\tfirst|second", "  TEXT\textra", "    FONTSIZE\t30"])
    slide = Presentation(str(output)).slides[0]
    texts = [shape.text_frame.text for shape in slide.shapes if shape.has_text_frame]
    assert texts == ["first\nsecond", "extra"]
    extra = [shape for shape in slide.shapes if shape.has_text_frame][1]
    assert extra.text_frame.paragraphs[0].runs[0].font.size.pt == 30


def test_transition_elements() -> None:
    assert transition_element_for(TransitionKind.NONE) is None
    assert transition_element_for(TransitionKind.COVER_LEFT_UP) == ("p:cover", {"dir": "lu"})
    assert transition_element_for(TransitionKind.UNCOVER_DOWN) == ("p:pull", {"dir": "d"})
    assert transition_element_for(TransitionKind.PAN_RIGHT) == ("p:push", {"dir": "r"})
    assert transition_element_for(TransitionKind.CUT_THROUGH_BLACK) == ("p:cut", {"thruBlk": "1"})
    for kind in TransitionKind:
        if kind is not TransitionKind.NONE:
            assert transition_element_for(kind) is not None


def test_transition_speed_and_manual_advance() -> None:
    assert speed_for(0.5) == "fast"
    assert speed_for(0.7) == "med"
    assert speed_for(1.0) == "slow"
    assert build_transition(SlideHandle(index=1)) is None

    slide = SlideHandle(index=1, transition=TransitionKind.DISSOLVE, transition_duration=0.5)
    element = build_transition(slide)
    assert element.get("spd") == "fast"
    assert element.get("advTm") is None
    assert element[0].tag == qn("p:dissolve")


def test_exit_effects_use_the_exit_preset_class() -> None:
    from slide_backends.base import EffectHandle
    from slide_backends.recording import RecordedShape

    shape = RecordedShape(2, "TextBox 2", 0.0, 0.0, 100.0, 20.0, paragraphs=["x"])
    assert preset_for(EffectHandle(shape=shape, kind=EffectKind.FADE)).preset_class == "entr"
    assert preset_for(EffectHandle(shape=shape, kind=EffectKind.FADE, exit=True)).preset_class == "exit"
    assert preset_for(EffectHandle(shape=shape, kind=EffectKind.GROW_SHRINK, exit=True)).preset_class == "emph"


def test_picture_geometry_matches_the_recording_backend(tmp_path: Path) -> None:
    from slide_backends.recording import picture_size_points

    path = tmp_path / "scan.png"
    Image.new("RGB", (301, 157)).save(path, dpi=(143.9926, 143.9926))
    backend = PptxBackend(tmp_path / "out.pptx")
    picture = backend.add_picture(backend.add_slide(), path)

    expected = picture_size_points(path)
    assert abs(picture.width - expected[0]) < 0.01
    assert abs(picture.height - expected[1]) < 0.01


def test_caption_runs_carry_an_outline(tmp_path: Path) -> None:
    output = _build(tmp_path, ["PAGE\t\tHello", "  TEXT\tWorld"])
    slide = Presentation(str(output)).slides[0]
    runs = [shape.text_frame.paragraphs[0].runs[0] for shape in slide.shapes if shape.has_text_frame]

    assert [run.text for run in runs] == ["Hello", "World"]
    for run in runs:
        outline = run._r.find(qn("a:rPr") + "/" + qn("a:ln"))
        assert outline is not None
        assert outline.get("w") == "12700"
