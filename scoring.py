from __future__ import annotations

from dataclasses import dataclass

from config import (
    GRAVITY_BASE_DELAY,
    GRAVITY_MIN_DELAY,
    GRAVITY_STEP,
    LEVEL_LINES,
    LINE_SCORES,
)


@dataclass
class ScoringRules:
    """Level-scaled classic line table, shared by manual and AI play."""

    line_scores: tuple[int, ...] = LINE_SCORES
    level_lines: int = LEVEL_LINES

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        lines = min(lines, len(self.line_scores) - 1)
        return self.line_scores[lines] * level

    def level_for(self, total_lines: int) -> int:
        return 1 + total_lines // self.level_lines


def gravity_delay(level: int) -> float:
    return max(GRAVITY_MIN_DELAY, GRAVITY_BASE_DELAY - GRAVITY_STEP * (level - 1))
