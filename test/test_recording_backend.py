from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest
from PIL import Image

from closures.models import EffectKind, TransitionKind
from slide_backends.base import TextStyle
from slide_backends.recording import DEFAULT_PICTURE_SIZE, RecordingBackend, picture_size_points
from slide_backends.text_metrics import LINE_SPACING, VERTICAL_INSET, fitted_height


def test_picture_size_honours_dpi(tmp_path: Path) -> None:
    path = tmp_path / "scan.png"
    Image.new("RGB", (300, 150)).save(path, dpi=(144, 144))
    assert picture_size_points(path) == pytest.approx((150.0, 75.0))


def test_fractional_dpi_is_rounded_like_python_pptx(tmp_path: Path) -> None:
    path = tmp_path / "scan.png"
    Image.new("RGB", (300, 150)).save(path, dpi=(143.9926, 143.9926))
    assert picture_size_points(path) == (150.0, 75.0)


def test_unreadable_picture_is_fatal_when_strict(tmp_path: Path) -> None:
    backend = RecordingBackend()
    slide = backend.add_slide()
    with pytest.raises(OSError):
        backend.add_picture(slide, tmp_path / "missing.jpg")


def test_unreadable_picture_uses_placeholder_size_when_lenient(tmp_path: Path) -> None:
    backend = RecordingBackend(strict_images=False)
    slide = backend.add_slide()
    shape = backend.add_picture(slide, tmp_path / "missing.jpg")
    assert (shape.width, shape.height) == DEFAULT_PICTURE_SIZE


def test_text_box_height_follows_line_count() -> None:
    backend = RecordingBackend()
    slide = backend.add_slide()
    one = backend.add_text_box(slide, "short", 0.0, 0.0, 720.0, TextStyle(font_size=20))
    two = backend.add_text_box(slide, "short\nlines", 0.0, 0.0, 720.0, TextStyle(font_size=20))

    assert one.height == pytest.approx(20 * LINE_SPACING + 2 * VERTICAL_INSET)
    assert two.height == pytest.approx(2 * 20 * LINE_SPACING + 2 * VERTICAL_INSET)


def test_long_paragraphs_wrap() -> None:
    narrow = fitted_height(["word " * 40], 20, 200.0)
    wide = fitted_height(["word " * 40], 20, 2000.0)
    assert narrow > wide


def test_pictures_do_not_hold_text(tmp_path: Path) -> None:
    path = tmp_path / "photo.png"
    Image.new("RGB", (64, 48)).save(path)
    backend = RecordingBackend()
    picture = backend.add_picture(backend.add_slide(), path)
    assert not picture.has_text
    with pytest.raises(NotImplementedError):
        picture.append_text("caption")


def test_split_by_paragraph_replaces_the_effect_in_place() -> None:
    backend = RecordingBackend()
    slide = backend.add_slide()
    box = backend.add_text_box(slide, "a\nb\nc", 0.0, 0.0, 720.0)
    other = backend.add_text_box(slide, "z", 0.0, 0.0, 720.0)
    before = backend.add_effect(slide, other, EffectKind.APPEAR)
    target = backend.add_effect(slide, box, EffectKind.FADE)
    after = backend.add_effect(slide, other, EffectKind.WIPE)

    first = backend.split_by_paragraph(slide, target)

    assert slide.effects[0] is before
    assert slide.effects[1] is first
    assert [effect.paragraph for effect in slide.effects[1:4]] == [0, 1, 2]
    assert slide.effects[4] is after
    assert slide.effects[1].timing is not slide.effects[2].timing


def test_summary_is_plain_data() -> None:
    backend = RecordingBackend()
    slide = backend.add_slide()
    box = backend.add_text_box(slide, "caption", 0.0, 500.0, 720.0)
    backend.add_effect(slide, box, EffectKind.FADE)
    backend.set_transition(slide, TransitionKind.FADE, 0.5)
    backend.set_advance(slide, 5.0)

    assert backend.finalize() is None
    summary = backend.summary()
    assert summary[0]["transition"] == "fade"
    assert summary[0]["advance_time"] == 5.0
    assert summary[0]["shapes"][0]["text"] == "caption"
    assert summary[0]["effects"][0]["kind"] == EffectKind.FADE.value
