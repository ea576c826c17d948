"""Scope base class and the command dispatcher.

Each scope class declares its script commands with :func:`operation`. The
declarations are collected into a per-class table keyed by lowercase command
name when the class is defined, so dispatch is a dictionary lookup followed by
coercion of the textual parameters against the declared parameter list.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Type, TypeVar

from logging_utils import get_logger

from .errors import (
    AncestorNotFoundError,
    InvalidEnumValueError,
    ScopeInvariantError,
    TooManyArgumentsError,
    TypeCoercionError,
    UnknownOperationError,
)

logger = get_logger(__name__)

_TRUE_WORDS = {"true", "1", "yes", "on"}
_FALSE_WORDS = {"false", "0", "no", "off"}


class _Required:
    def __repr__(self) -> str:
        return "REQUIRED"


REQUIRED: Any = _Required()


@dataclass(frozen=True)
class Param:
    name: str
    type: type
    default: Any = REQUIRED
    minimum: Optional[float] = None

    @property
    def optional(self) -> bool:
        return self.default is not REQUIRED

    def coerce(self, raw: Optional[str]) -> Any:
        if raw is None or (raw == "" and self.optional):
            if not self.optional:
                raise TypeCoercionError(self.type.__name__, None, self.name)
            return self.default
        if isinstance(self.type, type) and issubclass(self.type, Enum):
            return _coerce_enum(self.type, raw, self.name)
        if self.type is bool:
            return _coerce_bool(raw, self.name)
        if self.type in (int, float):
            try:
                value = self.type(raw.strip())
            except ValueError:
                raise TypeCoercionError(self.type.__name__, raw, self.name) from None
            if self.minimum is not None and value < self.minimum:
                raise TypeCoercionError(
                    self.type.__name__, raw, self.name, requirement=f"at least {self.minimum:g}"
                )
            return value
        if self.type is str:
            return raw
        raise TypeCoercionError(getattr(self.type, "__name__", str(self.type)), raw, self.name)


def _normalise_member(value: str) -> str:
    # "ByParagraph", "by_paragraph" and "by-paragraph" name the same member.
    return "".join(ch for ch in value.strip().lower() if ch not in "_- ")


def _lookup_member(enum_type: Type[Enum], value: str, parameter: str) -> Enum:
    wanted = _normalise_member(value)
    for name, member in enum_type.__members__.items():
        if _normalise_member(name) == wanted:
            return member
    raise InvalidEnumValueError(enum_type.__name__, value, parameter)


def _coerce_enum(enum_type: Type[Enum], raw: str, parameter: str) -> Enum:
    if issubclass(enum_type, Flag):
        # "|" has already become a line break by the time parameters get here.
        parts = [part for part in raw.replace("+", ",").replace("\n", ",").split(",") if part.strip()]
        if not parts:
            raise InvalidEnumValueError(enum_type.__name__, raw, parameter)
        result = enum_type(0)
        for part in parts:
            result |= _lookup_member(enum_type, part, parameter)
        return result
    return _lookup_member(enum_type, raw, parameter)


def _coerce_bool(raw: str, parameter: str) -> bool:
    lower = raw.strip().lower()
    if lower in _TRUE_WORDS:
        return True
    if lower in _FALSE_WORDS:
        return False
    raise TypeCoercionError("bool", raw, parameter)


@dataclass(frozen=True)
class Outcome:
    """Result of an operation: stay in the current scope or descend into a child."""

    child: Optional["Closure"] = None

    @property
    def descends(self) -> bool:
        return self.child is not None


STAY = Outcome()


def descend_to(child: "Closure") -> Outcome:
    return Outcome(child=child)


@dataclass(frozen=True)
class OperationSpec:
    name: str
    params: Tuple[Param, ...]
    handler: Callable[..., Outcome]


def operation(name: str, *params: Param) -> Callable[[Callable[..., Outcome]], Callable[..., Outcome]]:
    """Declare a script command on a scope class."""

    def decorator(func: Callable[..., Outcome]) -> Callable[..., Outcome]:
        func.__album_operation__ = OperationSpec(name=name.lower(), params=tuple(params), handler=func)  # type: ignore[attr-defined]
        return func

    return decorator


C = TypeVar("C", bound="Closure")


class Closure:
    """A node of the scope tree."""

    kind = "scope"
    operations: Dict[str, OperationSpec] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        table: Dict[str, OperationSpec] = {}
        for base in reversed(cls.__mro__[1:]):
            table.update(getattr(base, "operations", {}))
        for attr in vars(cls).values():
            spec = getattr(attr, "__album_operation__", None)
            if spec is not None:
                table[spec.name] = spec
        cls.operations = table

    def __init__(self, parent: Optional["Closure"]) -> None:
        self.parent = parent

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"

    def ancestor(self, kind: Type[C], required: bool = False) -> Optional[C]:
        scope = self.parent
        while scope is not None:
            if isinstance(scope, kind):
                return scope
            scope = scope.parent
        if required:
            raise AncestorNotFoundError(self.kind, getattr(kind, "kind", kind.__name__))
        return None

    def invoke(self, command: str, parameters: Sequence[str]) -> Outcome:
        spec = self.operations.get(command.lower())
        if spec is None:
            raise UnknownOperationError(self.kind, command)
        if len(parameters) > len(spec.params):
            raise TooManyArgumentsError(self.kind, command, len(parameters), len(spec.params))
        arguments = []
        for index, param in enumerate(spec.params):
            raw = parameters[index] if index < len(parameters) else None
            arguments.append(param.coerce(raw))
        logger.debug("%s.%s%r", self.kind, spec.name, tuple(arguments))
        outcome = spec.handler(self, *arguments)
        if not isinstance(outcome, Outcome):
            raise ScopeInvariantError(
                f"{self.kind}.{spec.name} returned {outcome!r} instead of an Outcome"
            )
        if outcome.descends and outcome.child.parent is not self:
            raise ScopeInvariantError(
                f"{self.kind}.{spec.name} opened a {outcome.child.kind} scope that is not parented to it"
            )
        return outcome

    def leave(self) -> None:
        logger.debug("Leaving %s scope", self.kind)
        self.on_leave()

    def on_leave(self) -> None:
        """Exit hook; fired when the indentation stack unwinds past this scope."""
