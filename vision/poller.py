# vision/poller.py
"""
Kamera-Polling im festen Takt.

Erkannte Werte laufen über denselben Weg wie Taps (GameSession.add_throw).
Ein in-flight Flag sorgt dafür, dass immer nur ein Frame ausgewertet wird.

Der Detektor meldet jedes Frame alle Darts, die gerade im Board stecken.
Übernommen werden nur die Einträge hinter den schon gezählten; erst wenn
weniger Darts erkannt werden (Darts gezogen), sinkt der Zähler wieder.
"""
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from config.constants import POLL_INTERVAL

logger = logging.getLogger(__name__)

FrameSource = Callable[[], Optional[bytes]]
Predictor = Callable[[bytes], Awaitable[List[int]]]


class FramePoller:
    def __init__(self, session, frame_source: FrameSource, predictor: Predictor,
                 interval: float = POLL_INTERVAL):
        self.session = session
        self.frame_source = frame_source
        self.predictor = predictor
        self.interval = interval
        self.in_flight = False
        # Darts im Board, die schon gezählt (oder verworfen) sind
        self.on_board = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        self.session.attach(self)
        logger.info("frame polling started (every %.2fs)", self.interval)

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.info("frame polling stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            await self.poll_once()

    async def poll_once(self) -> int:
        """Ein Zyklus. Liefert die Zahl der übernommenen Darts."""
        if self.in_flight or not self.session.accepting_input:
            return 0
        self.in_flight = True
        loop = asyncio.get_running_loop()
        try:
            try:
                frame = await loop.run_in_executor(None, self.frame_source)
                if not frame:
                    return 0
                scores = await self.predictor(frame)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.warning("camera or detector failed, no throw this cycle", exc_info=True)
                return 0
            return self._feed(list(scores or []))
        finally:
            self.in_flight = False

    def _feed(self, scores: List[int]) -> int:
        if len(scores) < self.on_board:
            logger.debug("board cleared (%d -> %d darts)", self.on_board, len(scores))
            self.on_board = len(scores)
        accepted = 0
        for value in scores[self.on_board:]:
            # nach dem 3. Dart ist die Session bis zum Board-Reset gesperrt,
            # was dann noch im Board steckt, gehört zur alten Aufnahme
            if not self.session.accepting_input:
                self.on_board = len(scores)
                break
            self.on_board += 1
            if self.session.add_throw(value):
                accepted += 1
        if accepted:
            logger.info("detected %s, %d new taken", scores, accepted)
        return accepted
