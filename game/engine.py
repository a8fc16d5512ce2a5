# game/engine.py
"""
Scoring Engine: wertet eine abgeschlossene Aufnahme aus.

Bust, wenn der Rest unter 0 fällt oder genau 1 übrig bleibt (1 ist mit
Double-Out nicht mehr checkbar). Gewonnen bei genau 0.
"""
import logging
from dataclasses import dataclass, replace
from typing import Sequence

from .models import GameState, TurnOutcome, TurnRecord
from . import history, turns

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnResult:
    outcome: TurnOutcome
    total: int
    new_score: int


def evaluate_turn(score: int, throws: Sequence[int]) -> TurnResult:
    total = sum(throws)
    new_score = score - total
    if new_score == 0:
        return TurnResult(TurnOutcome.WIN, total, 0)
    if new_score < 0 or new_score == 1:
        return TurnResult(TurnOutcome.BUST, total, score)
    return TurnResult(TurnOutcome.CONTINUE, total, new_score)


def commit_turn(state: GameState) -> GameState:
    """Bucht die gepufferten Darts für den aktiven Spieler."""
    if state.is_over or not state.current_turn_throws:
        return state

    index = state.active_player_index
    player = state.players[index]
    throws = state.current_turn_throws
    result = state.mode.evaluate(player.score, throws)

    record = TurnRecord(
        player_index=index,
        throws=throws,
        score_before_turn=player.score,
        outcome=result.outcome,
        players_before=state.players,
    )
    state = history.record_turn(state, record)
    state = replace(state, current_turn_throws=())

    if result.outcome is TurnOutcome.BUST:
        logger.info("%s busts with %d (stays on %d)", player.name, result.total, player.score)
        return turns.advance(state)

    state = state.with_player(index, score=result.new_score)
    if result.outcome is TurnOutcome.WIN:
        logger.info("%s checks out with %d", player.name, result.total)
        return turns.complete_leg(state, index)

    logger.info("%s scores %d, %d left", player.name, result.total, result.new_score)
    return turns.advance(state)
