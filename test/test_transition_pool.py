from __future__ import annotations

import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from closures.models import TransitionKind
from closures.transition_pool import DEFAULT_TRANSITIONS, TransitionPoolScope


def test_default_pool_excludes_none() -> None:
    pool = TransitionPoolScope(None)
    assert pool.is_default
    assert TransitionKind.NONE not in pool.transitions
    assert len(pool.transitions) == len(TransitionKind) - 1


def test_mutation_copies_the_default_pool() -> None:
    first = TransitionPoolScope(None)
    second = TransitionPoolScope(None)

    first.invoke("remove", ["fade"])

    assert not first.is_default
    assert TransitionKind.FADE not in first.transitions
    assert second.is_default
    assert TransitionKind.FADE in second.transitions
    assert TransitionKind.FADE in DEFAULT_TRANSITIONS


def test_clear_then_add_builds_a_custom_pool() -> None:
    pool = TransitionPoolScope(None)
    pool.invoke("clear", [])
    pool.invoke("add", ["Dissolve"])
    pool.invoke("add", ["cover_left"])
    assert list(pool.transitions) == [TransitionKind.DISSOLVE, TransitionKind.COVER_LEFT]


def test_removing_a_missing_transition_is_harmless() -> None:
    pool = TransitionPoolScope(None)
    pool.invoke("clear", [])
    pool.invoke("remove", ["fade"])
    assert list(pool.transitions) == []


def test_random_transition_draws_from_the_pool() -> None:
    pool = TransitionPoolScope(None)
    pool.invoke("clear", [])
    assert pool.random_transition(random.Random(1)) is TransitionKind.NONE

    pool.invoke("add", ["wipe_up"])
    rng = random.Random(3)
    assert {pool.random_transition(rng) for _ in range(5)} == {TransitionKind.WIPE_UP}
