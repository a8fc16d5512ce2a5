# vision/nn_inference.py
"""
Erkennungs-Kollaborator: Bildbytes rein, Dartwerte raus.

Ohne Gewichte ist das ein Platzhalter und liefert immer [] ("kein Wurf in
diesem Frame"). Mit YOLO-Gewichten und Homographie werden die Box-Mitten
auf das normierte Board projiziert und über vision.board bewertet.
"""
import asyncio
import logging
from typing import List, Optional, Tuple

import cv2
import numpy as np

from config.constants import MAX_DARTS_PER_TURN, YOLO_CONFIDENCE, YOLO_WEIGHTS
from .board import compute_score_from_tip

logger = logging.getLogger(__name__)


class DartsNetWrapper:
    def __init__(self, model_path: Optional[str] = YOLO_WEIGHTS, homography: Optional[np.ndarray] = None):
        self.model_path = model_path
        self.homography = homography
        self._model = None

    @property
    def ready(self) -> bool:
        return bool(self.model_path) and self.homography is not None

    def _load_model(self):
        if self._model is None:
            from ultralytics import YOLO  # optionales Extra [yolo]
            self._model = YOLO(self.model_path)
            logger.info("YOLO weights loaded from %s", self.model_path)
        return self._model

    def preprocess(self, image: bytes) -> Optional[np.ndarray]:
        if not image:
            return None
        buffer = np.frombuffer(image, dtype=np.uint8)
        frame = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
        if frame is None:
            logger.warning("could not decode frame (%d bytes)", len(image))
        return frame

    def detect_tips(self, frame: np.ndarray) -> List[Tuple[float, float]]:
        """Box-Mitten aller erkannten Darts (Bildkoordinaten)."""
        model = self._load_model()
        results = model(frame, device="cpu", conf=YOLO_CONFIDENCE, verbose=False)
        tips = []
        for r in results:
            if r.boxes is None:
                continue
            for box in r.boxes:
                x1, y1, x2, y2 = box.xyxy[0].cpu().numpy()
                tips.append(((x1 + x2) / 2, (y1 + y2) / 2))
        return tips

    def tips_to_scores(self, tips: List[Tuple[float, float]]) -> List[int]:
        if not tips:
            return []
        points = np.array([[[float(x), float(y)] for x, y in tips]], dtype=np.float32)
        warped = cv2.perspectiveTransform(points, self.homography)
        scores = []
        for x, y in warped[0]:
            value, label = compute_score_from_tip((float(x), float(y)))
            logger.debug("tip (%.0f, %.0f) -> %s", x, y, label)
            scores.append(value)
        return scores

    def predict_sync(self, image: bytes) -> List[int]:
        frame = self.preprocess(image)
        if frame is None or not self.ready:
            return []
        tips = self.detect_tips(frame)
        return self.tips_to_scores(tips)[:MAX_DARTS_PER_TURN]

    async def predict_scores(self, image: bytes) -> List[int]:
        """Async-Vertrag: Liste erkannter Punktwerte, evtl. leer."""
        if not self.ready:
            return []
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.predict_sync, image)
