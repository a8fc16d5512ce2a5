# game/roster.py
"""Roster-Eingabe beim Spielstart: Liste von {id, name} oder JSON davon."""
import json
from collections.abc import Mapping
from typing import List, Tuple, Union

from config.constants import MAX_NAME_LENGTH, MAX_PLAYERS, MIN_PLAYERS
from .errors import InitializationError
from .models import Player

RosterInput = Union[str, bytes, list, tuple]


def _load(payload: RosterInput) -> list:
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise InitializationError(f"roster is not valid JSON: {e}") from e
    if not isinstance(payload, (list, tuple)):
        raise InitializationError(f"roster must be a list of players, got {type(payload).__name__}")
    return list(payload)


def parse_roster(payload: RosterInput) -> List[Tuple[int, str]]:
    """Prüft den Roster und liefert (id, name) Paare in Sitzreihenfolge."""
    entries = _load(payload)
    if not MIN_PLAYERS <= len(entries) <= MAX_PLAYERS:
        raise InitializationError(
            f"a game needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(entries)}"
        )

    parsed = []
    seen_ids = set()
    for position, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise InitializationError(f"player #{position + 1} must be an object with id/name")

        player_id = entry.get("id", position + 1)
        if isinstance(player_id, bool) or not isinstance(player_id, int):
            raise InitializationError(f"player #{position + 1} has a non-integer id: {player_id!r}")
        if player_id in seen_ids:
            raise InitializationError(f"duplicate player id {player_id}")
        seen_ids.add(player_id)

        name = entry.get("name") or ""
        if not isinstance(name, str):
            raise InitializationError(f"player #{position + 1} has a non-string name: {name!r}")
        name = name.strip() or f"Player {position + 1}"
        if len(name) > MAX_NAME_LENGTH:
            raise InitializationError(
                f"name {name!r} is longer than {MAX_NAME_LENGTH} characters"
            )
        parsed.append((player_id, name))
    return parsed


def build_players(payload: RosterInput, starting_score: int) -> Tuple[Player, ...]:
    return tuple(
        Player(id=player_id, name=name, score=starting_score)
        for player_id, name in parse_roster(payload)
    )
