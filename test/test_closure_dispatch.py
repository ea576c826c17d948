from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest

from closures.base import STAY, Closure, Outcome, Param, descend_to, operation
from closures.errors import (
    AncestorNotFoundError,
    InvalidEnumValueError,
    ScopeInvariantError,
    TooManyArgumentsError,
    TypeCoercionError,
    UnknownOperationError,
)
from closures.models import AnimationOptions, EffectKind, TransitionKind


class _Child(Closure):
    kind = "child"


class _Probe(Closure):
    kind = "probe"

    def __init__(self, parent: Closure | None = None) -> None:
        super().__init__(parent)
        self.calls: list[tuple] = []

    @operation("set", Param("count", int), Param("ratio", float, 1.5), Param("label", str, "none"))
    def set_values(self, count: int, ratio: float, label: str) -> Outcome:
        self.calls.append((count, ratio, label))
        return STAY

    @operation("flags", Param("options", AnimationOptions, AnimationOptions.NONE))
    def flags(self, options: AnimationOptions) -> Outcome:
        self.calls.append((options,))
        return STAY

    @operation("effect", Param("effect", EffectKind, EffectKind.FADE), Param("enabled", bool, True))
    def effect(self, effect: EffectKind, enabled: bool) -> Outcome:
        self.calls.append((effect, enabled))
        return STAY

    @operation("open")
    def open_child(self) -> Outcome:
        return descend_to(_Child(self))

    @operation("orphan")
    def orphan(self) -> Outcome:
        return descend_to(_Child(None))

    @operation("broken")
    def broken(self):
        return None


def test_operation_table_is_keyed_by_lowercase_name() -> None:
    assert set(_Probe.operations) == {"set", "flags", "effect", "open", "orphan", "broken"}
    assert _Child.operations == {}


def test_dispatch_is_case_insensitive_and_coerces_primitives() -> None:
    probe = _Probe()
    assert probe.invoke("SET", ["3", "0.25", "hello"]) is STAY
    assert probe.calls == [(3, 0.25, "hello")]


def test_empty_optional_parameters_take_declared_defaults() -> None:
    probe = _Probe()
    probe.invoke("Set", ["4", "", ""])
    probe.invoke("set", ["5"])
    assert probe.calls == [(4, 1.5, "none"), (5, 1.5, "none")]


def test_formatted_values_coerce_back_to_equal_values() -> None:
    probe = _Probe()
    for value in (0, 7, -12):
        probe.invoke("set", [str(value), repr(2.75), "x"])
        assert probe.calls[-1][:2] == (value, 2.75)
    for kind in EffectKind:
        probe.invoke("effect", [kind.name, str(False)])
        assert probe.calls[-1] == (kind, False)


def test_flag_parameters_accept_combined_members() -> None:
    probe = _Probe()
    probe.invoke("flags", ["ByParagraph+WithPrevious"])
    probe.invoke("flags", ["exit, by_character"])
    probe.invoke("flags", ["None"])
    assert probe.calls == [
        (AnimationOptions.BY_PARAGRAPH | AnimationOptions.WITH_PREVIOUS,),
        (AnimationOptions.EXIT | AnimationOptions.BY_CHARACTER,),
        (AnimationOptions.NONE,),
    ]


def test_enum_names_ignore_case_and_separators() -> None:
    probe = _Probe()
    probe.invoke("effect", ["grow-shrink"])
    assert probe.calls[-1] == (EffectKind.GROW_SHRINK, True)


def test_unknown_operation() -> None:
    with pytest.raises(UnknownOperationError) as excinfo:
        _Probe().invoke("jump", [])
    assert excinfo.value.scope_kind == "probe"
    assert excinfo.value.command == "jump"
    assert excinfo.value.code == "unknown_operation"


def test_too_many_arguments() -> None:
    with pytest.raises(TooManyArgumentsError) as excinfo:
        _Probe().invoke("open", ["extra"])
    assert excinfo.value.supplied == 1
    assert excinfo.value.expected == 0


def test_invalid_enum_value() -> None:
    with pytest.raises(InvalidEnumValueError) as excinfo:
        _Probe().invoke("effect", ["Sparkle"])
    assert excinfo.value.enum_name == "EffectKind"
    assert excinfo.value.parameter == "effect"


def test_type_coercion_failures() -> None:
    with pytest.raises(TypeCoercionError):
        _Probe().invoke("set", ["three"])
    with pytest.raises(TypeCoercionError):
        _Probe().invoke("effect", ["fade", "maybe"])
    with pytest.raises(TypeCoercionError) as excinfo:
        _Probe().invoke("set", [])
    assert "missing required" in str(excinfo.value)


def test_required_parameter_rejects_empty_value() -> None:
    with pytest.raises(TypeCoercionError):
        Param("path", str).coerce("")
    assert Param("path", str, "").coerce("") == ""


def test_descend_returns_child_parented_to_scope() -> None:
    probe = _Probe()
    outcome = probe.invoke("open", [])
    assert outcome.descends
    assert outcome.child.parent is probe


def test_child_with_foreign_parent_is_rejected() -> None:
    with pytest.raises(ScopeInvariantError):
        _Probe().invoke("orphan", [])


def test_handler_must_return_outcome() -> None:
    with pytest.raises(ScopeInvariantError):
        _Probe().invoke("broken", [])


def test_ancestor_lookup() -> None:
    probe = _Probe()
    child = _Child(probe)
    assert child.ancestor(_Probe) is probe
    assert probe.ancestor(_Child) is None
    with pytest.raises(AncestorNotFoundError) as excinfo:
        probe.ancestor(_Child, required=True)
    assert excinfo.value.ancestor_kind == "child"


def test_transition_kind_members_round_trip_by_value() -> None:
    probe_param = Param("effect", TransitionKind)
    assert probe_param.coerce("cover_left_up") is TransitionKind.COVER_LEFT_UP
    assert probe_param.coerce("CoverLeftUp") is TransitionKind.COVER_LEFT_UP


def test_numeric_minimum_is_enforced() -> None:
    delay = Param("delay", float, 0.0, minimum=0.0)
    assert delay.coerce("0") == 0.0
    assert delay.coerce("") == 0.0
    with pytest.raises(TypeCoercionError) as excinfo:
        delay.coerce("-1")
    assert excinfo.value.value == "-1"
    assert "must be at least 0" in str(excinfo.value)
