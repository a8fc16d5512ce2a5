from dataclasses import replace

from conftest import with_scores
from game import history
from game.logic import reduce
from game.models import AddThrow, Undo


def throw_all(state, *values):
    for value in values:
        state = reduce(state, AddThrow(value))
    return state


def test_undo_inside_turn_pops_buffer_only(state):
    committed = throw_all(state, 20, 20, 20)
    partial = throw_all(committed, 5, 7)
    undone = reduce(partial, Undo())
    assert undone.current_turn_throws == (5,)
    assert undone.history == committed.history
    assert undone.active_player_index == 1


def test_undo_on_fresh_game_is_noop(state):
    assert not history.can_undo(state)
    assert reduce(state, Undo()) is state


def test_undo_restores_pre_commit_state(state):
    before = throw_all(state, 60, 60)
    after = reduce(before, AddThrow(57))
    undone = reduce(after, Undo())
    assert undone.players == before.players
    assert undone.active_player_index == before.active_player_index
    assert undone.is_over == before.is_over
    assert undone.winner_index == before.winner_index
    assert undone.history == ()


def test_undo_after_bust(state):
    state = with_scores(state, 40, 501)
    busted = throw_all(state, 20, 20, 5)
    undone = reduce(busted, Undo())
    assert undone.players[0].score == 40
    assert undone.active_player_index == 0


def test_undo_walks_back_several_turns(state):
    played = throw_all(state, 20, 20, 20, 19, 19, 19, 1, 1, 1)
    assert len(played.history) == 3
    for expected_player in (0, 1, 0):
        played = reduce(played, Undo())
        assert played.active_player_index == expected_player
    assert played.players == state.players
    assert played.history == ()


def test_history_records_every_commit(state):
    state = with_scores(state, 40, 501)
    state = throw_all(state, 20, 20, 5, 60, 60, 60)
    assert [r.player_index for r in state.history] == [0, 1]
    assert [r.total for r in state.history] == [45, 180]
    assert state.history[1].players_before[0].score == 40


def test_undo_clears_terminal_state(state):
    played = throw_all(with_scores(state, 10, 501), 1, 1, 1)
    over = replace(played, is_over=True, winner_index=1)
    undone = reduce(over, Undo())
    assert not undone.is_over
    assert undone.winner_index is None
