import pytest

from game.session import GameSession
from main import handle_command, render


@pytest.fixture
def session(game, scheduler):
    return GameSession(game, scheduler, commit_delay=1.5)


def test_keypad_commands(session):
    for command in ["20", "t", "5", "d"]:
        assert handle_command(session, command)
    assert session.state.current_turn_throws == (60, 10)
    assert handle_command(session, "u")
    assert session.state.current_turn_throws == (60,)
    assert not handle_command(session, "q")


def test_keypad_total(session):
    assert handle_command(session, "=140")
    assert session.state.players[0].score == 361
    assert "darts: 140" in render(session)


@pytest.mark.parametrize("command", ["²", "=²", "abc", "=-5"])
def test_unknown_input_is_ignored(session, command, capsys):
    assert handle_command(session, command)
    assert session.state.current_turn_throws == ()
    assert session.state.history == ()
    assert "?" in capsys.readouterr().out
