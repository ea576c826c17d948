"""Configuration loader for the album script interpreter."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import yaml  # type: ignore
except ModuleNotFoundError as exc:  # pragma: no cover - import guard
    raise RuntimeError(
        "PyYAML is required. Please install it with `pip install pyyaml`."
    ) from exc

DEFAULT_OUTPUT_FILE = "album.pptx"
DEFAULT_BACKEND = "pptx"


@dataclass
class AlbumConfig:
    """Wrapper around raw configuration with resolved paths."""

    raw: Dict[str, Any]
    config_path: Optional[Path]
    project_root: Path
    output_dir: Path
    output_file: str
    log_file: Path

    @property
    def logging_level(self) -> str:
        level = (
            self.raw.get("logging", {}).get("level")
            or self.raw.get("logging", {}).get("LEVEL")
            or "INFO"
        )
        return str(level).upper()

    @property
    def presentation(self) -> Dict[str, Any]:
        section = self.raw.get("presentation")
        return section if isinstance(section, dict) else {}

    @property
    def backend_name(self) -> str:
        return str(self.presentation.get("backend") or DEFAULT_BACKEND).lower()

    @property
    def template(self) -> Optional[Path]:
        template = self.presentation.get("template")
        if not template:
            return None
        return (self.project_root / str(template)).resolve()

    @property
    def slide_size_in(self) -> tuple[Optional[float], Optional[float]]:
        width = self.presentation.get("slide_width_in")
        height = self.presentation.get("slide_height_in")
        return (
            float(width) if width is not None else None,
            float(height) if height is not None else None,
        )

    @property
    def random_seed(self) -> Optional[int]:
        seed = self.presentation.get("random_seed")
        return int(seed) if seed is not None else None

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_file

    def to_debug_dict(self) -> Dict[str, Any]:
        return {
            "config_path": str(self.config_path) if self.config_path else None,
            "output_dir": str(self.output_dir),
            "output_file": self.output_file,
            "log_file": str(self.log_file),
            "backend": self.backend_name,
            "template": str(self.template) if self.template else None,
        }

    def dumps(self) -> str:
        """Return a JSON string for diagnostics."""
        return json.dumps(self.to_debug_dict(), ensure_ascii=False, indent=2)


def load_config(
    path: Path | str | None,
    project_root: Path | None = None,
    *,
    required: bool = False,
) -> AlbumConfig:
    """Load YAML config and resolve key directories.

    A missing file falls back to the built-in defaults unless ``required``.
    """
    config_path: Optional[Path] = Path(path).expanduser().resolve() if path else None
    raw: Dict[str, Any] = {}
    if config_path is not None and config_path.exists():
        with config_path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Config file must contain a mapping: {config_path}")
    elif required:
        raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        config_path = None

    if project_root:
        root = project_root.resolve()
    elif config_path is not None:
        root = config_path.parent
    else:
        root = Path.cwd()

    output_section = raw.get("output", {}) or {}
    output_dir = (root / output_section.get("directory", "output")).resolve()
    output_file = str(output_section.get("file_name") or DEFAULT_OUTPUT_FILE)
    log_file_name = (raw.get("logging", {}) or {}).get("file", "logs/album.log")
    log_file = (root / log_file_name).resolve()

    return AlbumConfig(
        raw=raw,
        config_path=config_path,
        project_root=root,
        output_dir=output_dir,
        output_file=output_file,
        log_file=log_file,
    )
