import os

# Spielarten
STARTING_SCORES = {"501": 501, "301": 301}
DEFAULT_STARTING_SCORE = 301

# Wurf / Runde
MAX_DARTS_PER_TURN = 3
MAX_DART_VALUE = 60  # T20
MAX_TURN_TOTAL = 180
BASE_VALUES = frozenset(list(range(0, 21)) + [25])
MULTIPLIERS = (1, 2, 3)
KEYPAD_CAP = MAX_TURN_TOTAL

# Spieler
MIN_PLAYERS = 2
MAX_PLAYERS = 4
MAX_NAME_LENGTH = 15

# Match-Format (1/1 = erster Checkout gewinnt)
LEGS_PER_SET = 1
SETS_PER_MATCH = 1

# Timing (Sekunden)
COMMIT_DELAY = 1.5
POLL_INTERVAL = 0.5

# Kamera
CAM_INDEX = int(os.environ.get("DARTS_CAM_INDEX", "0"))
ORIG_W, ORIG_H = 1920, 1080
JPEG_QUALITY = 95

# YOLO
YOLO_WEIGHTS = os.environ.get("DARTS_YOLO_WEIGHTS")
YOLO_CONFIDENCE = 0.3

# Dartboard-Geometrie (normiertes Bild nach Homographie)
TARGET_SIZE = 2000
CENTER = TARGET_SIZE // 2
RADIUS = 480
R_DOUBLE_OUTER = RADIUS
R_DOUBLE_INNER = int(RADIUS * (160 / 170))
R_TRIPLE_OUTER = int(RADIUS * 107 / 170)
R_TRIPLE_INNER = int(RADIUS * (97 / 170))
R_OUTER_BULL = int(RADIUS * ((31.8 / 2) / 170))
R_INNER_BULL = int(RADIUS * ((12.7 / 2) / 170))

# Segmente im Uhrzeigersinn ab 12 Uhr
SEGMENTS = [
    20, 1, 18, 4, 13, 6, 10, 15, 2, 17,
    3, 19, 7, 16, 8, 11, 14, 9, 12, 5
]

# Kalibrierung (4 Punkte auf dem Double-Ring, Reihenfolge oben/rechts/unten/links)
JSON_PATH = os.environ.get("DARTS_CALIBRATION", "dartboard_points_calibration.json")
POINT_NAMES = ["Mitte", "P_05_20", "P_13_06", "P_17_03", "P_08_11"]
