"""Gemeinsame Fixtures für die Spielkern-Tests."""
from dataclasses import replace

import pytest

from game.logic import Game, new_game
from game.scheduler import ScheduledTask, Scheduler


class ManualScheduler(Scheduler):
    """Scheduler mit Hand-Uhr: advance() lässt fällige Aufgaben laufen."""

    def __init__(self):
        self.now = 0.0
        self.tasks = []

    def call_later(self, delay, callback):
        task = ScheduledTask(callback)
        self.tasks.append((self.now + delay, task))
        return task

    @property
    def pending(self):
        return [task for _, task in self.tasks if task.pending]

    def advance(self, seconds):
        self.now += seconds
        due = [(at, task) for at, task in self.tasks if at <= self.now]
        self.tasks = [(at, task) for at, task in self.tasks if at > self.now]
        for _, task in sorted(due, key=lambda item: item[0]):
            task.run()


ROSTER = [{"id": 1, "name": "Papa"}, {"id": 2, "name": "Erik"}]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def state():
    return new_game("501", ROSTER)


@pytest.fixture
def game():
    return Game("501", ROSTER)


def with_scores(state, *scores):
    """Setzt die Scores der Spieler der Reihe nach."""
    players = tuple(replace(p, score=s) for p, s in zip(state.players, scores))
    return replace(state, players=players)
