# ai_agent.py (exhaustive placement search)
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

import core_game as game  # expects: shape_at, state_count, get_drop_y, lock_piece, clear_lines
from config import DEFAULT_WEIGHTS

NO_MOVE_SCORE = -1e9
NO_MOVE_THRESHOLD = -1e8


@dataclass(frozen=True)
class MoveDecision:
    rotation: int
    column: int
    score: float
    lines: int


def is_placeable(decision: MoveDecision) -> bool:
    return decision.score >= NO_MOVE_THRESHOLD


class AIAgent:
    def __init__(self, weights: Optional[Dict[str, float]] = None):
        self.weights: Dict[str, float] = dict(DEFAULT_WEIGHTS)
        if weights:
            self.weights.update(weights)

    # ----------------------------
    # Feature extraction
    # ----------------------------
    def extract_features(self, grid: np.ndarray, lines_cleared: int = 0) -> Dict[str, float]:
        heights = game.column_heights(grid)
        return {
            "complete_lines": float(lines_cleared),
            "holes": float(game.count_holes(grid)),
            "aggregate_height": float(np.sum(heights)),
            "bumpiness": float(np.sum(np.abs(np.diff(heights)))),
        }

    def evaluate_board(self, grid: np.ndarray, lines_cleared: int = 0) -> float:
        feats = self.extract_features(grid, lines_cleared)
        return float(sum(self.weights.get(k, 0.0) * v for k, v in feats.items()))

    # ----------------------------
    # Simulation & decision
    # ----------------------------
    def _simulate_placement(self, grid: np.ndarray, shape: np.ndarray, x: int, y: int, color: int):
        """Place on a copy, clear lines there; the live grid is untouched."""
        test_grid = grid.copy()
        game.lock_piece(test_grid, shape, x, y, color)
        lines_cleared = game.clear_lines(test_grid)
        return test_grid, lines_cleared

    def choose_action(self, grid: np.ndarray, kind: str) -> MoveDecision:
        """
        Try every rotation state and every column from -4 to the board width.
        The first candidate seen keeps ties (strict >).
        """
        best = MoveDecision(0, 0, NO_MOVE_SCORE, 0)
        color = game.piece_color(kind)
        n_cols = grid.shape[1]

        for rotation in range(game.state_count(kind)):
            shape = game.shape_at(kind, rotation)
            for x in range(-shape.shape[1], n_cols + 1):
                y = game.get_drop_y(grid, shape, x)
                if y is None:
                    continue

                new_grid, lines_cleared = self._simulate_placement(grid, shape, x, y, color)
                score = self.evaluate_board(new_grid, lines_cleared)

                if score > best.score:
                    best = MoveDecision(rotation, x, score, lines_cleared)

        return best

    def get_drop_position(self, grid: np.ndarray, kind: str, decision: MoveDecision) -> Optional[int]:
        return game.get_drop_y(grid, game.shape_at(kind, decision.rotation), decision.column)
