import asyncio
import threading

import pytest

from game.session import GameSession
from vision.poller import FramePoller


@pytest.fixture
def session(game, scheduler):
    return GameSession(game, scheduler, commit_delay=1.5)


def make_predictor(*results):
    queue = list(results)

    async def predict(frame):
        result = queue.pop(0) if queue else []
        if isinstance(result, Exception):
            raise result
        return result
    return predict


def test_detected_values_go_through_add_throw(session):
    poller = FramePoller(session, lambda: b"jpeg", make_predictor([20, 60]))
    assert asyncio.run(poller.poll_once()) == 2
    assert session.state.current_turn_throws == (20, 60)


def test_empty_or_missing_frame_means_no_throw(session):
    poller = FramePoller(session, lambda: None, make_predictor([20]))
    assert asyncio.run(poller.poll_once()) == 0
    poller = FramePoller(session, lambda: b"jpeg", make_predictor([]))
    assert asyncio.run(poller.poll_once()) == 0
    assert session.state.current_turn_throws == ()


def test_detector_failure_is_not_fatal(session):
    poller = FramePoller(session, lambda: b"jpeg", make_predictor(RuntimeError("no model")))
    assert asyncio.run(poller.poll_once()) == 0
    assert not poller.in_flight


def test_feed_stops_at_commit(session):
    session.add_throw(1)
    poller = FramePoller(session, lambda: b"jpeg", make_predictor([1, 1, 1]))
    assert asyncio.run(poller.poll_once()) == 2
    assert session.busy
    assert len(session.state.history) == 1


def test_skips_while_session_resetting(session, scheduler):
    session.submit_total(60)
    frames = []
    poller = FramePoller(session, lambda: frames.append(1) or b"jpeg", make_predictor([20]))
    assert asyncio.run(poller.poll_once()) == 0
    assert frames == []
    scheduler.advance(1.5)
    assert asyncio.run(poller.poll_once()) == 1


def test_only_one_cycle_in_flight(session):
    async def scenario():
        gate = asyncio.Event()

        async def slow_predict(frame):
            await gate.wait()
            return [5]

        poller = FramePoller(session, lambda: b"jpeg", slow_predict)
        first = asyncio.create_task(poller.poll_once())
        await asyncio.sleep(0)
        second = await poller.poll_once()
        gate.set()
        return await first, second

    first, second = asyncio.run(scenario())
    assert (first, second) == (1, 0)
    assert session.state.current_turn_throws == (5,)


def test_start_and_stop_loop(session):
    async def scenario():
        poller = FramePoller(session, lambda: b"jpeg", make_predictor([3], [3, 4]), interval=0.01)
        poller.start()
        await asyncio.sleep(0.1)
        session.close()
        await asyncio.sleep(0.03)
        return poller

    poller = asyncio.run(scenario())
    assert not poller.running
    assert session.state.current_turn_throws[:2] == (3, 4)


def test_dart_left_in_board_counts_once(session):
    poller = FramePoller(session, lambda: b"jpeg", lambda frame: asyncio.sleep(0, result=[60]))
    for _ in range(3):
        asyncio.run(poller.poll_once())
    assert session.state.current_turn_throws == (60,)
    assert session.state.history == ()
    assert session.state.players[0].score == 301


def test_only_new_darts_are_taken(session):
    poller = FramePoller(session, lambda: b"jpeg", make_predictor([20], [20], [20, 5], [20, 5]))
    taken = [asyncio.run(poller.poll_once()) for _ in range(4)]
    assert taken == [1, 0, 1, 0]
    assert session.state.current_turn_throws == (20, 5)


def test_darts_of_committed_turn_are_not_counted_again(session, scheduler):
    poller = FramePoller(session, lambda: b"jpeg",
                         make_predictor([20, 20, 20], [20, 20, 20], [], [5]))
    assert asyncio.run(poller.poll_once()) == 3
    assert session.busy
    scheduler.advance(1.5)

    # Darts stecken noch, dann gezogen, dann neuer Dart
    assert asyncio.run(poller.poll_once()) == 0
    assert asyncio.run(poller.poll_once()) == 0
    assert asyncio.run(poller.poll_once()) == 1
    assert session.state.active_player_index == 1
    assert session.state.current_turn_throws == (5,)


def test_camera_failure_is_not_fatal(session):
    def unplugged():
        raise OSError("camera unplugged")

    poller = FramePoller(session, unplugged, make_predictor([20]))
    assert asyncio.run(poller.poll_once()) == 0
    assert not poller.in_flight
    assert session.state.current_turn_throws == ()


def test_frame_is_grabbed_off_the_event_loop(session):
    threads = []

    def grab():
        threads.append(threading.current_thread())
        return b"jpeg"

    poller = FramePoller(session, grab, make_predictor([1]))
    asyncio.run(poller.poll_once())
    assert threads and threads[0] is not threading.main_thread()
