# game/modes.py
"""
Spielmodi als getaggte Variante {kind, rules}.

Nur X01 (501/301) hat Regeln. Around the Clock und Cricket sind wählbar,
werfen aber UnsupportedModeError statt still wie X01 zu zählen.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Sequence

from config.constants import (
    DEFAULT_STARTING_SCORE, KEYPAD_CAP, LEGS_PER_SET, SETS_PER_MATCH, STARTING_SCORES,
)
from .engine import TurnResult, evaluate_turn
from .errors import InitializationError, UnsupportedModeError

logger = logging.getLogger(__name__)


class ModeKind(str, Enum):
    X01 = "x01"
    CLOCK = "clock"
    CRICKET = "cricket"


@dataclass(frozen=True)
class RuleSet:
    starting_score: int = DEFAULT_STARTING_SCORE
    legs_per_set: int = LEGS_PER_SET
    sets_per_match: int = SETS_PER_MATCH
    keypad_cap: int = KEYPAD_CAP

    def __post_init__(self) -> None:
        for name in ("starting_score", "legs_per_set", "sets_per_match"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise InitializationError(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(self.keypad_cap, int) or self.keypad_cap < 0:
            raise InitializationError(f"keypad_cap must be >= 0, got {self.keypad_cap!r}")


Evaluator = Callable[[int, Sequence[int]], TurnResult]


def _unsupported(kind: ModeKind) -> Evaluator:
    def evaluate(score: int, throws: Sequence[int]) -> TurnResult:
        raise UnsupportedModeError(kind.value)
    return evaluate


_EVALUATORS: Dict[ModeKind, Evaluator] = {
    ModeKind.X01: evaluate_turn,
    ModeKind.CLOCK: _unsupported(ModeKind.CLOCK),
    ModeKind.CRICKET: _unsupported(ModeKind.CRICKET),
}


@dataclass(frozen=True)
class GameMode:
    kind: ModeKind
    rules: RuleSet = field(default_factory=RuleSet)

    @property
    def supported(self) -> bool:
        return self.kind is ModeKind.X01

    @property
    def label(self) -> str:
        if self.kind is ModeKind.X01:
            return str(self.rules.starting_score)
        return self.kind.value

    def ensure_supported(self) -> None:
        if not self.supported:
            raise UnsupportedModeError(self.kind.value)

    def evaluate(self, score: int, throws: Sequence[int]) -> TurnResult:
        return _EVALUATORS[self.kind](score, throws)


def mode_from_identifier(identifier: str, **rule_options) -> GameMode:
    """
    "501" -> X01/501, "301" -> X01/301, "clock"/"cricket" -> nicht unterstützte
    Varianten. Alles andere fällt still auf 301 zurück (nur Warnung im Log).
    """
    key = str(identifier).strip().lower()
    if key in STARTING_SCORES:
        return GameMode(ModeKind.X01, RuleSet(starting_score=STARTING_SCORES[key], **rule_options))
    if key in (ModeKind.CLOCK.value, ModeKind.CRICKET.value):
        return GameMode(ModeKind(key), RuleSet(**rule_options))
    logger.warning("unknown game type %r, falling back to %d", identifier, DEFAULT_STARTING_SCORE)
    return GameMode(ModeKind.X01, RuleSet(starting_score=DEFAULT_STARTING_SCORE, **rule_options))
