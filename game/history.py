# game/history.py
"""
Verlauf (append-only) und Undo.

Jeder TurnRecord hält einen Schnappschuss ALLER Spieler vor dem Commit,
damit Undo auch Leg-Resets (mehrere Scores + Leg-/Set-Zähler) zurücknimmt.
"""
import logging
from dataclasses import replace

from .models import GameState, TurnRecord
from . import throws

logger = logging.getLogger(__name__)


def record_turn(state: GameState, record: TurnRecord) -> GameState:
    return replace(state, history=state.history + (record,))


def can_undo(state: GameState) -> bool:
    return bool(state.current_turn_throws or state.history)


def undo(state: GameState) -> GameState:
    if state.current_turn_throws:
        return throws.remove_last(state)
    if not state.history:
        return state

    record = state.history[-1]
    logger.info(
        "undo turn of %s (%s), back to %d",
        state.players[record.player_index].name,
        record.outcome.value,
        record.score_before_turn,
    )
    return replace(
        state,
        players=record.players_before,
        active_player_index=record.player_index,
        history=state.history[:-1],
        is_over=False,
        winner_index=None,
    )
