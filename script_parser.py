"""Utilities to parse album script lines into instructions."""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

from closures.errors import MalformedLineError
from logging_utils import get_logger

logger = get_logger(__name__)

PARAMETER_DELIMITER = "\t"
LINE_BREAK_MARKER = "|"
COMMENT_MARKER = "#"

_LINE_RE = re.compile(r"^(?P<indent>\s*)(?P<command>\S+)(?:\s(?P<params>.*))?$")


@dataclass(frozen=True)
class Instruction:
    indentation: int
    command: str
    parameters: Tuple[str, ...]
    line_number: int = 0
    text: str = ""


def parse_text_expression(value: str) -> str:
    """Replace the in-band line-break marker with real line breaks."""
    if not value:
        return ""
    return value.replace(LINE_BREAK_MARKER, "\n")


def split_parameters(expression: str | None) -> Tuple[str, ...]:
    if expression is None:
        return ()
    return tuple(parse_text_expression(part) for part in expression.split(PARAMETER_DELIMITER))


def is_ignorable(line: str) -> bool:
    """Blank lines and comment lines never reach the parser."""
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_MARKER)


def parse_line(line: str, line_number: int = 0) -> Instruction:
    line = line.rstrip("\r\n")
    match = _LINE_RE.match(line)
    if match is None:
        raise MalformedLineError("unrecognised line", line_number=line_number, line=line)
    return Instruction(
        indentation=len(match.group("indent")),
        command=match.group("command"),
        parameters=split_parameters(match.group("params")),
        line_number=line_number,
        text=line,
    )


def iter_instructions(lines: Iterable[str]) -> Iterator[Instruction]:
    for line_number, line in enumerate(lines, start=1):
        if is_ignorable(line):
            continue
        yield parse_line(line, line_number)


def read_script_lines(path: Path | str) -> List[str]:
    """Read a script file; a UTF-8 BOM is tolerated."""
    script_path = Path(path).expanduser().resolve()
    if not script_path.exists():
        raise FileNotFoundError(f"Script file not found: {script_path}")

    raw_text = script_path.read_text(encoding="utf-8-sig")
    lines = raw_text.splitlines()
    logger.info("Read %d script lines from %s", len(lines), script_path)
    return lines
