"""Errors raised while interpreting an album script."""
from __future__ import annotations

from typing import Optional


class AlbumScriptError(RuntimeError):
    """Fatal interpreter error with a stable error code.

    The driver fills in ``line_number`` and ``line`` for errors raised while a
    script line is being processed.
    """

    code = "album_script_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.reason = message
        self.line_number: Optional[int] = None
        self.line: Optional[str] = None

    def attach_line(self, line_number: int, line: str) -> None:
        if self.line_number is None:
            self.line_number = line_number
            self.line = line

    def __str__(self) -> str:
        if self.line_number is None:
            return self.reason
        return f"line {self.line_number}: {self.reason} ({self.line!r})"


class MalformedLineError(AlbumScriptError):
    code = "malformed_line"

    def __init__(self, message: str, *, line_number: Optional[int] = None, line: Optional[str] = None) -> None:
        super().__init__(message)
        if line_number is not None:
            self.attach_line(line_number, line or "")


class UnknownOperationError(AlbumScriptError):
    code = "unknown_operation"

    def __init__(self, scope_kind: str, command: str) -> None:
        super().__init__(f"operation '{command}' not found in {scope_kind} scope")
        self.scope_kind = scope_kind
        self.command = command


class TooManyArgumentsError(AlbumScriptError):
    code = "too_many_arguments"

    def __init__(self, scope_kind: str, command: str, supplied: int, expected: int) -> None:
        super().__init__(
            f"{supplied} arguments supplied but {scope_kind}.{command} takes at most {expected}"
        )
        self.scope_kind = scope_kind
        self.command = command
        self.supplied = supplied
        self.expected = expected


class InvalidEnumValueError(AlbumScriptError):
    code = "invalid_enum_value"

    def __init__(self, enum_name: str, value: str, parameter: str) -> None:
        super().__init__(f"'{value}' is not a valid {enum_name} for parameter '{parameter}'")
        self.enum_name = enum_name
        self.value = value
        self.parameter = parameter


class TypeCoercionError(AlbumScriptError):
    code = "type_coercion"

    def __init__(
        self, type_name: str, value: Optional[str], parameter: str, *, requirement: Optional[str] = None
    ) -> None:
        if value is None:
            message = f"missing required {type_name} parameter '{parameter}'"
        elif requirement is not None:
            message = f"{type_name} parameter '{parameter}' must be {requirement}, got '{value}'"
        else:
            message = f"cannot convert '{value}' to {type_name} for parameter '{parameter}'"
        super().__init__(message)
        self.type_name = type_name
        self.value = value
        self.parameter = parameter


class ScopeInvariantError(AlbumScriptError):
    code = "scope_invariant"


class AncestorNotFoundError(AlbumScriptError):
    code = "ancestor_not_found"

    def __init__(self, scope_kind: str, ancestor_kind: str) -> None:
        super().__init__(f"no enclosing {ancestor_kind} scope found from {scope_kind} scope")
        self.scope_kind = scope_kind
        self.ancestor_kind = ancestor_kind


class BackendError(AlbumScriptError):
    """A slide backend failed while carrying out a script line, e.g. an unreadable image."""

    code = "backend_failure"
