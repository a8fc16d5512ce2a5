# vision/capture.py
import logging
from typing import Optional

import cv2

from config.constants import CAM_INDEX, JPEG_QUALITY, ORIG_H, ORIG_W

logger = logging.getLogger(__name__)


class WebcamManager:
    def __init__(self, cam_index: int = CAM_INDEX):
        self.cap = None
        self.cam_index = cam_index

    def init_camera(self) -> bool:
        """Öffnet die Kamera (falls noch nicht offen)."""
        if self.cap is None or not self.cap.isOpened():
            self.cap = cv2.VideoCapture(self.cam_index)
            self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, ORIG_W)
            self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, ORIG_H)
            self.cap.set(cv2.CAP_PROP_FPS, 30)
            if self.cap.isOpened():
                logger.info("camera /dev/video%d opened", self.cam_index)
        return self.cap.isOpened()

    def capture_frame(self):
        if not self.init_camera():
            raise RuntimeError(f"camera /dev/video{self.cam_index} not available")
        ret, frame = self.cap.read()
        if not ret:
            raise RuntimeError(f"no frame from /dev/video{self.cam_index}")
        return cv2.resize(frame, (ORIG_W, ORIG_H))

    def capture_jpeg(self) -> Optional[bytes]:
        """Aktuelles Frame als JPEG; None wenn die Kamera nichts liefert."""
        try:
            frame = self.capture_frame()
        except RuntimeError as e:
            logger.warning("%s", e)
            return None
        ok, encoded = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, JPEG_QUALITY])
        if not ok:
            return None
        return encoded.tobytes()

    def release(self):
        if self.cap:
            self.cap.release()
            self.cap = None
