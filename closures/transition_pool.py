"""Pool of slide entry transitions that pages pick from at random."""
from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

from logging_utils import get_logger

from .base import STAY, Closure, Outcome, Param, operation
from .models import TransitionKind

logger = get_logger(__name__)

# TransitionKind.NONE is never part of the pool.
DEFAULT_TRANSITIONS: Tuple[TransitionKind, ...] = tuple(
    kind for kind in TransitionKind if kind is not TransitionKind.NONE
)


class TransitionPoolScope(Closure):
    kind = "transitions"

    def __init__(self, parent: Optional[Closure]) -> None:
        super().__init__(parent)
        self._override: Optional[List[TransitionKind]] = None

    @property
    def transitions(self) -> Sequence[TransitionKind]:
        return DEFAULT_TRANSITIONS if self._override is None else self._override

    @property
    def is_default(self) -> bool:
        return self._override is None

    def _materialize(self) -> List[TransitionKind]:
        if self._override is None:
            self._override = list(DEFAULT_TRANSITIONS)
        return self._override

    @operation("add", Param("effect", TransitionKind))
    def add(self, effect: TransitionKind) -> Outcome:
        self._materialize().append(effect)
        return STAY

    @operation("remove", Param("effect", TransitionKind))
    def remove(self, effect: TransitionKind) -> Outcome:
        pool = self._materialize()
        if effect in pool:
            pool.remove(effect)
        else:
            logger.debug("Transition %s is not in the pool", effect.value)
        return STAY

    @operation("clear")
    def clear(self) -> Outcome:
        self._override = []
        return STAY

    def random_transition(self, rng: random.Random) -> TransitionKind:
        pool = self.transitions
        if not pool:
            return TransitionKind.NONE
        return pool[rng.randrange(len(pool))]
