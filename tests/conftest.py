import numpy as np
import pytest

import core_game as game


def _grid_from(picture):
    """Build a full-size grid; the picture's rows fill the bottom of the board.

    '#' (or a digit) is a filled cell, '.' is empty.
    """
    lines = [line.strip() for line in picture.strip().splitlines()]
    grid = game.create_grid()
    top = game.rows - len(lines)
    for r, line in enumerate(lines):
        assert len(line) == game.cols, line
        for c, ch in enumerate(line):
            if ch == "#":
                grid[top + r, c] = 1
            elif ch.isdigit():
                grid[top + r, c] = int(ch)
    return grid


class FixedBag:
    """Deterministic stand-in for SevenBag that cycles a fixed sequence."""

    def __init__(self, kinds):
        self.kinds = list(kinds)
        self.drawn = 0

    def next(self):
        kind = self.kinds[self.drawn % len(self.kinds)]
        self.drawn += 1
        return kind

    def peek(self, n):
        return [self.kinds[(self.drawn + i) % len(self.kinds)] for i in range(n)]


@pytest.fixture
def grid_from():
    return _grid_from


@pytest.fixture
def empty_grid():
    return game.create_grid()


@pytest.fixture
def fixed_bag():
    return FixedBag


@pytest.fixture
def cells_of():
    def _cells(grid):
        return {(int(r), int(c)) for r, c in zip(*np.nonzero(grid))}
    return _cells
