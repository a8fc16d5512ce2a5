# vision/calibration.py
import json
import logging
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from config.constants import CENTER, JSON_PATH, POINT_NAMES, RADIUS

logger = logging.getLogger(__name__)


def homography_from_points(points: dict) -> np.ndarray:
    """Homographie Kamerabild -> normiertes Board aus den 4 Double-Ring-Punkten."""
    src_pts = np.array(
        [[points[name]["x"], points[name]["y"]] for name in POINT_NAMES[1:]], dtype=np.float32
    )
    dst_pts = np.array(
        [[CENTER, CENTER - RADIUS], [CENTER + RADIUS, CENTER],
         [CENTER, CENTER + RADIUS], [CENTER - RADIUS, CENTER]],
        dtype=np.float32,
    )
    H, _ = cv2.findHomography(src_pts, dst_pts)
    return H


def load_homography(json_path: str = JSON_PATH) -> Optional[np.ndarray]:
    path = Path(json_path)
    if not path.exists():
        logger.warning("calibration file not found: %s", path)
        return None
    with open(path, "r") as f:
        data = json.load(f)
    H = homography_from_points(data["points"])
    logger.info("homography loaded from %s", path)
    return H
