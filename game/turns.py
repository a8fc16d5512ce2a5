# game/turns.py
"""Turn Manager: Reihenfolge am Board, Leg-/Set-/Match-Abschluss."""
import logging
from dataclasses import replace

from .models import GameState

logger = logging.getLogger(__name__)


def next_index(state: GameState) -> int:
    return (state.active_player_index + 1) % len(state.players)


def advance(state: GameState) -> GameState:
    return replace(state, active_player_index=next_index(state))


def complete_leg(state: GameState, index: int) -> GameState:
    """
    Spieler `index` hat gecheckt. Leg zählen, ggf. Set und Match.
    Bei Matchgewinn bleiben Score (0) und Leg-Stand des Siegers stehen,
    es wird nicht weitergedreht; sonst beginnt ein neues Leg für alle bei
    starting_score.
    """
    rules = state.mode.rules
    winner = state.players[index]
    legs_won = winner.legs_won + 1
    sets_won = winner.sets_won

    players = list(state.players)
    if legs_won >= rules.legs_per_set:
        sets_won += 1
        logger.info("%s wins set %d", winner.name, sets_won)

    if sets_won >= rules.sets_per_match:
        players[index] = replace(winner, legs_won=legs_won, sets_won=sets_won)
        logger.info("%s wins the match", winner.name)
        return replace(state, players=tuple(players), is_over=True, winner_index=index)

    if sets_won > winner.sets_won:
        players = [replace(p, legs_won=0) for p in players]
        players[index] = replace(players[index], sets_won=sets_won)
    else:
        players[index] = replace(winner, legs_won=legs_won)

    # neues Leg
    players = [replace(p, score=state.starting_score) for p in players]
    logger.info("%s wins the leg, new leg from %d", winner.name, state.starting_score)
    return advance(replace(state, players=tuple(players)))
