# core_game.py (headless board + piece catalog, vectorized)
from typing import Dict, List, Optional, Tuple

import numpy as np

from config import cols, rows

ROWS, COLS = rows, cols

PIECE_TYPES = ('I', 'J', 'L', 'O', 'S', 'T', 'Z')

piece_color_id = {
    'I': 1,
    'O': 2,
    'T': 3,
    'J': 4,
    'L': 5,
    'S': 6,
    'Z': 7,
}

# Base 4x4 masks; rotation state 0 of every piece
base_shapes = {
    'I': [[0,0,0,0],
          [1,1,1,1],
          [0,0,0,0],
          [0,0,0,0]],
    'J': [[1,0,0,0],
          [1,1,1,0],
          [0,0,0,0],
          [0,0,0,0]],
    'L': [[0,0,1,0],
          [1,1,1,0],
          [0,0,0,0],
          [0,0,0,0]],
    'O': [[0,1,1,0],
          [0,1,1,0],
          [0,0,0,0],
          [0,0,0,0]],
    'S': [[0,1,1,0],
          [1,1,0,0],
          [0,0,0,0],
          [0,0,0,0]],
    'T': [[0,1,0,0],
          [1,1,1,0],
          [0,0,0,0],
          [0,0,0,0]],
    'Z': [[1,1,0,0],
          [0,1,1,0],
          [0,0,0,0],
          [0,0,0,0]],
}

# Distinct rotation states per piece (natural symmetry)
rotation_states = {'I': 2, 'J': 4, 'L': 4, 'O': 1, 'S': 2, 'T': 4, 'Z': 2}


def rotate90(shape: np.ndarray) -> np.ndarray:
    """Quarter turn clockwise: rotated[i][j] = shape[3-j][i]."""
    n = shape.shape[0]
    rotated = np.zeros_like(shape)
    for i in range(n):
        for j in range(n):
            rotated[i, j] = shape[n - 1 - j, i]
    return rotated


def _build_catalog() -> Dict[str, List[np.ndarray]]:
    catalog = {}
    for kind in PIECE_TYPES:
        states = [np.array(base_shapes[kind], dtype=np.int8)]
        while len(states) < rotation_states[kind]:
            states.append(rotate90(states[-1]))
        for s in states:
            s.setflags(write=False)
        catalog[kind] = states
    return catalog


tetrominoes = _build_catalog()


def state_count(kind: str) -> int:
    return len(tetrominoes[kind])


def shape_at(kind: str, rotation: int) -> np.ndarray:
    states = tetrominoes[kind]
    if not 0 <= rotation < len(states):
        raise IndexError(f"rotation {rotation} out of range for {kind} ({len(states)} states)")
    return states[rotation]


def piece_color(kind: str) -> int:
    return piece_color_id[kind]


def shape_cells(shape: np.ndarray, x: int, y: int) -> List[Tuple[int, int]]:
    """Board (row, col) of every occupied mask cell with the window at (x, y)."""
    rs, cs = np.nonzero(shape)
    return [(int(r) + y, int(c) + x) for r, c in zip(rs, cs)]


# ----------------------------
# Board
# ----------------------------
def create_grid() -> np.ndarray:
    return np.zeros((rows, cols), dtype=np.int8)


def check_collision(grid: np.ndarray, shape: np.ndarray, x: int, y: int) -> bool:
    n_rows, n_cols = grid.shape
    rs, cs = np.nonzero(shape)
    rs = rs + y
    cs = cs + x

    # Walls and floor; rows above the field only count horizontally
    if np.any((cs < 0) | (cs >= n_cols) | (rs >= n_rows)):
        return True

    visible = rs >= 0
    return bool(np.any(grid[rs[visible], cs[visible]] != 0))


def lock_piece(grid: np.ndarray, shape: np.ndarray, x: int, y: int, color: int = 1) -> np.ndarray:
    """Write color into the grid in place. Cells above row 0 are dropped."""
    n_rows, n_cols = grid.shape
    rs, cs = np.nonzero(shape)
    rs = rs + y
    cs = cs + x
    keep = (rs >= 0) & (rs < n_rows) & (cs >= 0) & (cs < n_cols)
    grid[rs[keep], cs[keep]] = color
    return grid


def clear_lines(grid: np.ndarray) -> int:
    """Remove full rows in place, bottom to top, and return how many."""
    cleared = 0
    r = grid.shape[0] - 1
    while r >= 0:
        if np.all(grid[r] != 0):
            cleared += 1
            grid[1:r + 1] = grid[0:r].copy()
            grid[0] = 0
            # same index again: the row above just moved into it
        else:
            r -= 1
    return cleared


def get_drop_y(grid: np.ndarray, shape: np.ndarray, x: int) -> Optional[int]:
    """
    Lowest row where shape rests at column x.
    Returns None if the shape cannot even enter from above.
    """
    y = -shape.shape[0]
    while not check_collision(grid, shape, x, y + 1):
        y += 1
    if check_collision(grid, shape, x, y):
        return None
    return y


# ----------------------------
# Column features
# ----------------------------
def column_heights(grid: np.ndarray) -> np.ndarray:
    n_rows = grid.shape[0]
    occ = grid != 0
    any_col = occ.any(axis=0)
    first_occ = np.where(any_col, np.argmax(occ, axis=0), n_rows)
    return n_rows - first_occ


def column_height(grid: np.ndarray, c: int) -> int:
    return int(column_heights(grid)[c])


def aggregate_height(grid: np.ndarray) -> int:
    return int(np.sum(column_heights(grid)))


def bumpiness(grid: np.ndarray) -> int:
    return int(np.sum(np.abs(np.diff(column_heights(grid)))))


def count_holes(grid: np.ndarray) -> int:
    # Empty cells below the topmost occupied cell of their column
    n_rows = grid.shape[0]
    occ = grid != 0
    tops = n_rows - column_heights(grid)
    r_idx = np.arange(n_rows)[:, None]
    return int(np.sum((r_idx >= tops[None, :]) & ~occ))
