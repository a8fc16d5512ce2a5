# game/session.py
"""
Sitzung zwischen Spielkern und Oberfläche.

Nach einer vollen Aufnahme bleiben die Darts und der Spieler kurz sichtbar
(commit_delay), erst dann wird das Board zurückgesetzt. In dieser Zeit
werden keine Würfe angenommen. close() bricht den offenen Timer ab.
"""
import logging
from typing import Callable, List, Optional, Tuple

from config.constants import COMMIT_DELAY
from .logic import Game
from .models import GameState, TurnRecord
from .scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

Listener = Callable[["GameSession"], None]


class GameSession:
    def __init__(self, game: Game, scheduler: Scheduler, commit_delay: float = COMMIT_DELAY):
        self.game = game
        self.scheduler = scheduler
        self.commit_delay = commit_delay
        self.closed = False
        self._pending: Optional[ScheduledTask] = None
        self._last_turn: Optional[TurnRecord] = None
        self._listeners: List[Listener] = []
        self._pollers = []

    @property
    def state(self) -> GameState:
        return self.game.state

    @property
    def busy(self) -> bool:
        """True solange das Board nach einem Commit noch nicht zurückgesetzt ist."""
        return self._pending is not None and self._pending.pending

    @property
    def accepting_input(self) -> bool:
        return not self.closed and not self.busy and not self.game.finished

    @property
    def display_throws(self) -> Tuple[int, ...]:
        if self.busy and self._last_turn is not None:
            return self._last_turn.throws
        return self.state.current_turn_throws

    @property
    def display_player_index(self) -> int:
        if self.busy and self._last_turn is not None:
            return self._last_turn.player_index
        return self.state.active_player_index

    @property
    def last_turn(self) -> Optional[TurnRecord]:
        return self._last_turn

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def attach(self, poller) -> None:
        self._pollers.append(poller)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _apply(self, action: Callable[[], GameState]) -> bool:
        if not self.accepting_input:
            return False
        before = self.state
        after = action()
        if len(after.history) > len(before.history):
            self._turn_committed(after.history[-1])
        changed = after is not before
        if changed:
            self._notify()
        return changed

    def _turn_committed(self, record: TurnRecord) -> None:
        self._last_turn = record
        self._pending = self.scheduler.call_later(self.commit_delay, self._reset_board)

    def _reset_board(self) -> None:
        self._pending = None
        self._last_turn = None
        self._notify()

    def add_throw(self, value: int) -> bool:
        return self._apply(lambda: self.game.add_throw(value))

    def apply_multiplier(self, factor: int) -> bool:
        return self._apply(lambda: self.game.apply_multiplier(factor))

    def submit(self) -> bool:
        return self._apply(self.game.submit)

    def submit_total(self, value: int) -> bool:
        return self._apply(lambda: self.game.submit_total(value))

    def undo(self) -> bool:
        if self.closed or not self.game.can_undo:
            return False
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
            self._last_turn = None
        self.game.undo()
        self._notify()
        return True

    def close(self) -> None:
        """Aufräumen beim Verlassen: Timer und Kamera-Polling stoppen."""
        if self.closed:
            return
        self.closed = True
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        for poller in self._pollers:
            poller.stop()
        self._pollers.clear()
        self._listeners.clear()
        logger.info("session closed")
