# game/models.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from config.constants import BASE_VALUES, MULTIPLIERS
from .errors import InvalidThrowError

if TYPE_CHECKING:
    from .modes import GameMode


class TurnOutcome(str, Enum):
    CONTINUE = "continue"
    BUST = "bust"
    WIN = "win"


@dataclass(frozen=True)
class EffectiveThrow:
    """Ein Dart: Segmentwert (0-20, 25) mal Ring (1/2/3)."""

    base_value: int
    multiplier: int = 1

    def __post_init__(self) -> None:
        if self.base_value not in BASE_VALUES:
            raise InvalidThrowError(f"base value must be 0-20 or 25, got {self.base_value!r}")
        if self.multiplier not in MULTIPLIERS:
            raise InvalidThrowError(f"multiplier must be 1, 2 or 3, got {self.multiplier!r}")

    @property
    def points(self) -> int:
        return self.base_value * self.multiplier

    @property
    def is_double(self) -> bool:
        return self.multiplier == 2 and self.base_value > 0


@dataclass(frozen=True)
class Player:
    id: int
    name: str
    score: int
    legs_won: int = 0
    sets_won: int = 0


@dataclass(frozen=True)
class TurnRecord:
    """Eintrag im Verlauf; enthält alles, um den Commit exakt zurückzunehmen."""

    player_index: int
    throws: Tuple[int, ...]
    score_before_turn: int
    outcome: TurnOutcome
    players_before: Tuple[Player, ...]

    @property
    def total(self) -> int:
        return sum(self.throws)


@dataclass(frozen=True)
class GameState:
    players: Tuple[Player, ...]
    mode: GameMode
    active_player_index: int = 0
    current_turn_throws: Tuple[int, ...] = ()
    history: Tuple[TurnRecord, ...] = ()
    is_over: bool = False
    winner_index: Optional[int] = None

    @property
    def starting_score(self) -> int:
        return self.mode.rules.starting_score

    @property
    def current_player(self) -> Player:
        return self.players[self.active_player_index]

    @property
    def winner(self) -> Optional[Player]:
        if self.winner_index is None:
            return None
        return self.players[self.winner_index]

    def with_player(self, index: int, **changes) -> GameState:
        players = list(self.players)
        players[index] = replace(players[index], **changes)
        return replace(self, players=tuple(players))


# Events für den Reducer (logic.reduce)

@dataclass(frozen=True)
class AddThrow:
    value: int


@dataclass(frozen=True)
class ApplyMultiplier:
    factor: int


@dataclass(frozen=True)
class RemoveLast:
    pass


@dataclass(frozen=True)
class Submit:
    pass


@dataclass(frozen=True)
class SubmitTotal:
    value: int


@dataclass(frozen=True)
class Undo:
    pass
