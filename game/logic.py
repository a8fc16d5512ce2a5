# game/logic.py
import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from config.constants import MAX_TURN_TOTAL
from .engine import commit_turn
from .history import can_undo, undo
from .models import (
    AddThrow, ApplyMultiplier, GameState, Player, RemoveLast, Submit, SubmitTotal, Undo,
)
from .modes import GameMode, mode_from_identifier
from .roster import RosterInput, build_players
from . import throws

logger = logging.getLogger(__name__)


def new_game(game_type: str, roster: RosterInput, **rule_options) -> GameState:
    """Legt ein Spiel an. Wirft InitializationError / UnsupportedModeError."""
    mode = mode_from_identifier(game_type, **rule_options)
    return new_game_for_mode(mode, roster)


def new_game_for_mode(mode: GameMode, roster: RosterInput) -> GameState:
    mode.ensure_supported()
    players = build_players(roster, mode.rules.starting_score)
    logger.info(
        "new %s game: %s", mode.label, ", ".join(p.name for p in players)
    )
    return GameState(players=players, mode=mode)


def _submit_total(state: GameState, value) -> GameState:
    # Ziffernblock: ganze Aufnahme als eine Zahl, nur bei leerem Puffer
    if state.is_over or state.current_turn_throws:
        return state
    if isinstance(value, bool) or not isinstance(value, int):
        return state
    if not 0 <= value <= min(state.mode.rules.keypad_cap, MAX_TURN_TOTAL):
        logger.debug("keypad total %r ignored", value)
        return state
    return commit_turn(replace(state, current_turn_throws=(value,)))


def reduce(state: GameState, event) -> GameState:
    """Reine Übergangsfunktion (GameState, Event) -> GameState."""
    if isinstance(event, AddThrow):
        state = throws.add_throw(state, event.value)
        if throws.is_full(state):
            state = commit_turn(state)
        return state
    if isinstance(event, ApplyMultiplier):
        return throws.apply_multiplier(state, event.factor)
    if isinstance(event, RemoveLast):
        return throws.remove_last(state)
    if isinstance(event, Submit):
        return commit_turn(state)
    if isinstance(event, SubmitTotal):
        return _submit_total(state, event.value)
    if isinstance(event, Undo):
        return undo(state)
    raise TypeError(f"unknown event: {event!r}")


class Game:
    """Hält den aktuellen GameState und wendet Events darauf an."""

    def __init__(self, game_type: str, roster: RosterInput, **rule_options):
        self.state: GameState = new_game(game_type, roster, **rule_options)

    @classmethod
    def from_state(cls, state: GameState) -> "Game":
        game = cls.__new__(cls)
        game.state = state
        return game

    def dispatch(self, event) -> GameState:
        self.state = reduce(self.state, event)
        return self.state

    @property
    def players(self) -> List[Player]:
        return list(self.state.players)

    @property
    def current_player(self) -> Player:
        return self.state.current_player

    @property
    def finished(self) -> bool:
        return self.state.is_over

    @property
    def winner(self) -> Optional[Player]:
        return self.state.winner

    @property
    def can_undo(self) -> bool:
        return can_undo(self.state)

    def add_throw(self, value: int) -> GameState:
        return self.dispatch(AddThrow(value))

    def apply_multiplier(self, factor: int) -> GameState:
        return self.dispatch(ApplyMultiplier(factor))

    def submit(self) -> GameState:
        return self.dispatch(Submit())

    def submit_total(self, value: int) -> GameState:
        return self.dispatch(SubmitTotal(value))

    def undo(self) -> GameState:
        return self.dispatch(Undo())

    def register_throw(self, darts: Iterable[int]) -> None:
        """Ganze Aufnahme (z.B. vom Netz) Dart für Dart eintragen."""
        turns_before = len(self.state.history)
        for value in darts:
            if self.finished or len(self.state.history) != turns_before:
                break
            self.add_throw(value)
