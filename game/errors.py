# game/errors.py
"""
Fehlerhierarchie des Spielkerns.

- GameError (Basis)
  - InitializationError  (ungültige Spielanlage / Roster)
  - UnsupportedModeError (Spielmodus ohne Regeln)
  - InvalidThrowError    (ungültiger Dart, auch ValueError)
"""


class GameError(Exception):
    """Basis für alle Fehler des Spielkerns."""


class InitializationError(GameError):
    pass


class UnsupportedModeError(GameError):
    def __init__(self, mode: str):
        super().__init__(f"mode not supported: {mode}")
        self.mode = mode


class InvalidThrowError(GameError, ValueError):
    pass
