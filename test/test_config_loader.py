from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest

from animation_config import ImageMotionProfile, TextStyleProfile, resolve_motion_profile, resolve_text_profile
from backend_factory import make_backend
from config_loader import load_config
from slide_backends.pptx.backend import PptxBackend
from slide_backends.recording import RecordingBackend


def test_load_config_resolves_paths(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "\n".join(
            [
                "output:",
                "  directory: build",
                "  file_name: trip.pptx",
                "logging:",
                "  level: debug",
                "  file: logs/trip.log",
                "presentation:",
                "  backend: recording",
                "  slide_width_in: 13.333",
                "  slide_height_in: 7.5",
                "  random_seed: 42",
            ]
        ),
        encoding="utf-8",
    )
    config = load_config(config_path)

    assert config.config_path == config_path.resolve()
    assert config.output_path == (tmp_path / "build" / "trip.pptx").resolve()
    assert config.log_file == (tmp_path / "logs" / "trip.log").resolve()
    assert config.logging_level == "DEBUG"
    assert config.backend_name == "recording"
    assert config.slide_size_in == (13.333, 7.5)
    assert config.random_seed == 42
    assert config.template is None
    assert '"backend": "recording"' in config.dumps()


def test_missing_config_falls_back_to_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "absent.yaml", project_root=tmp_path)

    assert config.raw == {}
    assert config.config_path is None
    assert config.output_path == (tmp_path / "output" / "album.pptx").resolve()
    assert config.backend_name == "pptx"
    assert config.logging_level == "INFO"
    assert config.random_seed is None


def test_missing_config_can_be_required(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml", required=True)


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(config_path)


def test_motion_profile_ignores_bad_values() -> None:
    profile = resolve_motion_profile(
        {"animation": {"base_duration": "6", "zoom_factor": -1, "text_duration": "fast", "page_persist": 0}}
    )
    assert profile.base_duration == 6.0
    assert profile.zoom_factor == ImageMotionProfile().zoom_factor
    assert profile.text_duration == ImageMotionProfile().text_duration
    assert profile.page_persist == 0.0
    assert resolve_motion_profile(None) == ImageMotionProfile()


def test_text_profile_normalises_colour() -> None:
    assert resolve_text_profile({"text": {"color": "#ffcc00", "caption_font_size": 30}}) == TextStyleProfile(
        caption_font_size=30.0, color="FFCC00"
    )
    assert resolve_text_profile({"text": {"color": "orange"}}).color == "FFFFFF"


def test_make_backend_selects_implementation(tmp_path: Path) -> None:
    config = load_config(None, project_root=tmp_path)
    backend = make_backend(config, tmp_path / "album.pptx")
    assert isinstance(backend, PptxBackend)
    assert backend.slide_size() == pytest.approx((720.0, 540.0))

    dry = make_backend(config, dry_run=True)
    assert isinstance(dry, RecordingBackend)
    assert not dry.strict_images

    config.raw["presentation"] = {"backend": "recording", "slide_width_in": 16, "slide_height_in": 9}
    recording = make_backend(config)
    assert isinstance(recording, RecordingBackend)
    assert recording.slide_size() == (1152.0, 648.0)

    config.raw["presentation"] = {"backend": "keynote"}
    with pytest.raises(ValueError):
        make_backend(config)
