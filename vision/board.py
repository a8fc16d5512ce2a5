# vision/board.py
import math
from typing import Optional, Tuple

from config.constants import (
    CENTER, SEGMENTS, R_DOUBLE_INNER, R_DOUBLE_OUTER,
    R_TRIPLE_INNER, R_TRIPLE_OUTER, R_INNER_BULL, R_OUTER_BULL,
)

ANGLE_STEP = 2 * math.pi / 20
START_ANGLE = -math.pi / 2  # 12 Uhr


def segment_at(x: float, y: float) -> int:
    """Segmentzahl für einen Punkt im normierten Board-Bild (y zeigt nach unten)."""
    angle = math.atan2(y - CENTER, x - CENTER) - START_ANGLE + ANGLE_STEP / 2
    angle %= 2 * math.pi
    return SEGMENTS[int(angle / ANGLE_STEP) % 20]


def compute_score_from_tip(exact_tip: Optional[Tuple[float, float]]) -> Tuple[int, str]:
    """Punkte + Kürzel (z.B. 60, "T20") für eine Dartspitze nach Homographie."""
    if exact_tip is None:
        return 0, "Mis"

    x, y = exact_tip
    r_tip = math.hypot(x - CENTER, y - CENTER)
    if r_tip > R_DOUBLE_OUTER:
        return 0, "Mis"
    if r_tip <= R_INNER_BULL:
        return 50, "B50"
    if r_tip <= R_OUTER_BULL:
        return 25, "B25"

    score = segment_at(x, y)
    if r_tip > R_DOUBLE_INNER:
        return score * 2, f"D{score}"
    if R_TRIPLE_INNER < r_tip <= R_TRIPLE_OUTER:
        return score * 3, f"T{score}"
    return score, f"S{score}"
