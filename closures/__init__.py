"""Scope tree of the album script interpreter.

The concrete scopes live in their own modules (``closures.document``,
``closures.page``, ``closures.text``, ``closures.transition_pool``) and are
imported from there.
"""
from .base import REQUIRED, STAY, Closure, Outcome, Param, descend_to, operation
from .errors import (
    AlbumScriptError,
    AncestorNotFoundError,
    BackendError,
    InvalidEnumValueError,
    MalformedLineError,
    ScopeInvariantError,
    TooManyArgumentsError,
    TypeCoercionError,
    UnknownOperationError,
)
from .models import AnimationOptions, EffectKind, PrimaryImageAnimation, TransitionKind

__all__ = [
    "REQUIRED",
    "STAY",
    "Closure",
    "Outcome",
    "Param",
    "descend_to",
    "operation",
    "AlbumScriptError",
    "AncestorNotFoundError",
    "BackendError",
    "InvalidEnumValueError",
    "MalformedLineError",
    "ScopeInvariantError",
    "TooManyArgumentsError",
    "TypeCoercionError",
    "UnknownOperationError",
    "AnimationOptions",
    "EffectKind",
    "PrimaryImageAnimation",
    "TransitionKind",
]
