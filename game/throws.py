# game/throws.py
"""
Wurfpuffer der laufenden Aufnahme (max. 3 Darts).

Ungültige Eingaben werfen keinen Fehler: der Zustand bleibt einfach gleich.
"""
import logging
from dataclasses import replace

from config.constants import MAX_DART_VALUE, MAX_DARTS_PER_TURN
from .models import EffectiveThrow, GameState

logger = logging.getLogger(__name__)


def is_valid_dart_value(value) -> bool:
    # bool ist auch int - Tastendruck "True" ist kein Dart
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= MAX_DART_VALUE


def accepts_throws(state: GameState) -> bool:
    return not state.is_over and len(state.current_turn_throws) < MAX_DARTS_PER_TURN


def add_throw(state: GameState, value) -> GameState:
    if isinstance(value, EffectiveThrow):
        value = value.points
    if not accepts_throws(state):
        logger.debug("throw %r ignored: buffer full or game over", value)
        return state
    if not is_valid_dart_value(value):
        logger.debug("throw %r ignored: out of range", value)
        return state
    return replace(state, current_turn_throws=state.current_turn_throws + (value,))


def apply_multiplier(state: GameState, factor: int) -> GameState:
    """Double/Triple wirkt immer nur auf den zuletzt eingegebenen Dart."""
    if not state.current_turn_throws or factor not in (2, 3):
        return state
    *rest, last = state.current_turn_throws
    boosted = last * factor
    if boosted > MAX_DART_VALUE:
        logger.debug("multiplier x%d on %d ignored: %d is not a legal dart", factor, last, boosted)
        return state
    return replace(state, current_turn_throws=tuple(rest) + (boosted,))


def remove_last(state: GameState) -> GameState:
    if not state.current_turn_throws:
        return state
    return replace(state, current_turn_throws=state.current_turn_throws[:-1])


def is_full(state: GameState) -> bool:
    return len(state.current_turn_throws) >= MAX_DARTS_PER_TURN
