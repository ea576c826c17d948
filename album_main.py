"""Command line entry for the album script interpreter."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from album_generator import AlbumGenerator
from animation_config import resolve_motion_profile, resolve_text_profile
from backend_factory import make_backend
from closures.errors import AlbumScriptError
from config_loader import load_config
from logging_utils import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a timed photo-album presentation from a script")
    parser.add_argument("script", help="Path to the album script file")
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to configuration file (default: config.yaml; defaults apply if it is missing)",
    )
    parser.add_argument(
        "--output",
        help="Output presentation path (if omitted uses output.directory/output.file_name)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Interpret the script with the in-memory backend and print the recorded slides",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for transition and image animation choices",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Start in debug mode (image file names are drawn on each page)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    configure_logging(config.logging_level, None if args.dry_run else config.log_file)
    logger.debug("Resolved configuration: %s", config.dumps())

    output_path = Path(args.output).expanduser().resolve() if args.output else config.output_path
    seed = args.seed if args.seed is not None else config.random_seed

    try:
        backend = make_backend(config, output_path, dry_run=args.dry_run)
    except ValueError as exc:
        parser.error(str(exc))

    generator = AlbumGenerator(
        backend,
        motion_profile=resolve_motion_profile(config.raw),
        text_profile=resolve_text_profile(config.raw),
        seed=seed,
        debug=args.debug,
    )

    logger.info("Loading script: %s", args.script)
    try:
        result = generator.generate_from_file(args.script)
    except AlbumScriptError as exc:
        print(f"error [{exc.code}]: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    summary = {
        "script": str(Path(args.script).expanduser().resolve()),
        "output_path": str(result.output_path) if result.output_path else None,
        "page_count": result.page_count,
        "animation_count": result.animation_count,
    }
    if args.dry_run:
        summary["slides"] = backend.summary()
    print(json.dumps(summary, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
