# config.py (shared constants + weights file)
import json
import os
from typing import Dict, Optional

cols, rows = 10, 20
BOARD_COLS, BOARD_ROWS = cols, rows

# Timing (seconds)
INPUT_REPEAT_DELAY = 0.08
GRAVITY_BASE_DELAY = 0.8
GRAVITY_STEP = 0.05
GRAVITY_MIN_DELAY = 0.05
AI_COOLDOWN = 1.08

# Scoring / progression
LINE_SCORES = (0, 40, 100, 300, 1200)
LEVEL_LINES = 10

PREVIEW_COUNT = 5

# Heuristic weights tuned offline
DEFAULT_WEIGHTS: Dict[str, float] = {
    "complete_lines": 0.760666,
    "holes": -0.35663,
    "aggregate_height": -0.510066,
    "bumpiness": -0.184483,
}

RESULTS_DIR = "ga_results"
WEIGHTS_FILE = "best_overall.json"

# Display
block_size = 24
FPS = 60
width, height = 640, 720
board_x, board_y = 20, 20

bg_color = (0, 0, 0)
menu_bg_color = (20, 20, 40)
PALETTE = {
    0: (0, 0, 0),
    1: (102, 191, 255),   # I  sky blue
    2: (253, 249, 0),     # O  yellow
    3: (255, 0, 255),     # T  magenta
    4: (0, 121, 241),     # J  blue
    5: (255, 161, 0),     # L  orange
    6: (0, 228, 48),      # S  green
    7: (230, 41, 55),     # Z  red
}


def default_weights_path() -> str:
    return os.path.join(RESULTS_DIR, WEIGHTS_FILE)


def load_weights(path: Optional[str] = None) -> Optional[Dict[str, float]]:
    """Load heuristic weights from a JSON file.

    Accepts either ``{"weights": {...}, ...}`` or a bare ``{name: value}``
    mapping. Returns None when the file is missing or unreadable.
    """
    filepath = path or default_weights_path()

    if not os.path.exists(filepath):
        print(f"[Warning] No weights file at {filepath}, using defaults")
        return None

    try:
        with open(filepath, "r") as f:
            data = json.load(f)
        weights = data["weights"] if "weights" in data else data
        weights = {str(k): float(v) for k, v in weights.items()}
    except (OSError, ValueError, TypeError, AttributeError) as e:
        print(f"[Warning] Could not load weights from {filepath}: {e}")
        return None

    print(f"[Load] Weights loaded from {filepath}")
    return weights


def save_weights(weights: Dict[str, float], path: Optional[str] = None, **meta) -> str:
    filepath = path or default_weights_path()
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
    payload = dict(meta)
    payload["weights"] = dict(weights)
    with open(filepath, "w") as f:
        json.dump(payload, f, indent=2)
    return filepath
