# main.py
"""
Dart-Scorer auf der Kommandozeile.

    python main.py 501 Papa Erik [--legs 3] [--camera 2 --weights best.pt]

Eingaben: Zahl = Dart (0-20, 25), d/t = Double/Triple auf den letzten Dart,
s = Aufnahme abschicken, =140 = ganze Aufnahme als Summe, u = Undo, q = Ende.
"""
import argparse
import asyncio
import logging

from config.constants import (
    COMMIT_DELAY, JSON_PATH, LEGS_PER_SET, POLL_INTERVAL, SETS_PER_MATCH, YOLO_WEIGHTS,
)
from game.errors import GameError
from game.logic import Game
from game.scheduler import AsyncioScheduler
from game.session import GameSession

logger = logging.getLogger("darts")


def render(session: GameSession) -> str:
    state = session.state
    lines = []
    for index, player in enumerate(state.players):
        marker = ">" if index == session.display_player_index and not state.is_over else " "
        lines.append(
            f"{marker} {player.name:<15} {player.score:>4}   legs {player.legs_won}  sets {player.sets_won}"
        )
    darts = " ".join(str(v) for v in session.display_throws) or "-"
    lines.append(f"  darts: {darts}")
    if state.is_over:
        lines.append(f"  {state.winner.name} gewinnt!")
    return "\n".join(lines)


def handle_command(session: GameSession, command: str) -> bool:
    """Führt eine Eingabe aus. False beendet die Schleife."""
    command = command.strip().lower()
    if not command:
        return True
    if command == "q":
        return False
    if command == "u":
        session.undo()
    elif command == "d":
        session.apply_multiplier(2)
    elif command == "t":
        session.apply_multiplier(3)
    elif command == "s":
        session.submit()
    elif command.startswith("=") and command[1:].isdecimal():
        session.submit_total(int(command[1:]))
    elif command.isdecimal():
        if not session.add_throw(int(command)):
            print("  (nicht angenommen)")
    else:
        print("  ?  Zahl | d | t | s | =summe | u | q")
    return True


def build_poller(session: GameSession, args):
    from vision.calibration import load_homography
    from vision.capture import WebcamManager
    from vision.nn_inference import DartsNetWrapper
    from vision.poller import FramePoller

    net = DartsNetWrapper(args.weights, load_homography(args.calibration))
    if not net.ready:
        logger.warning("detector not ready (weights or calibration missing), camera throws disabled")
        return None, None
    webcam = WebcamManager(args.camera)
    return FramePoller(session, webcam.capture_jpeg, net.predict_scores, args.interval), webcam


async def run(args) -> None:
    game = Game(args.game_type, [{"name": name} for name in args.players],
                legs_per_set=args.legs, sets_per_match=args.sets)
    session = GameSession(game, AsyncioScheduler(), commit_delay=args.delay)
    session.subscribe(lambda s: print(render(s)))

    webcam = None
    if args.camera is not None:
        poller, webcam = build_poller(session, args)
        if poller is not None:
            poller.start()

    print(render(session))
    loop = asyncio.get_running_loop()
    try:
        while True:
            command = await loop.run_in_executor(None, input, "> ")
            if not handle_command(session, command):
                break
    except EOFError:
        pass
    finally:
        session.close()
        if webcam is not None:
            webcam.release()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="X01 Dart-Scorer")
    parser.add_argument("game_type", help="501, 301 (clock/cricket noch nicht unterstützt)")
    parser.add_argument("players", nargs="+", help="2-4 Spielernamen")
    parser.add_argument("--legs", type=int, default=LEGS_PER_SET, help="Legs pro Set")
    parser.add_argument("--sets", type=int, default=SETS_PER_MATCH, help="Sets pro Match")
    parser.add_argument("--delay", type=float, default=COMMIT_DELAY, help="Anzeigedauer nach der Aufnahme")
    parser.add_argument("--camera", type=int, default=None, help="Kamera-Index für automatische Erkennung")
    parser.add_argument("--weights", default=YOLO_WEIGHTS, help="YOLO-Gewichte (.pt)")
    parser.add_argument("--calibration", default=JSON_PATH)
    parser.add_argument("--interval", type=float, default=POLL_INTERVAL)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(run(args))
    except GameError as e:
        logger.error("%s", e)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
