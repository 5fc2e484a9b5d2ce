from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional, Tuple

import numpy as np

import core_game as game
from ai_agent import MoveDecision, is_placeable
from bag import SevenBag
from config import PREVIEW_COUNT
from controllers import Action, InputState, Key
from scoring import ScoringRules, gravity_delay


class Phase(Enum):
    SPAWNING = auto()
    ACTIVE = auto()
    LOCKING = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class ActivePiece:
    kind: str
    rotation: int
    x: int  # column of the 4x4 window's left edge
    y: int  # row of the window's top edge, may be above the field

    @property
    def shape(self) -> np.ndarray:
        return game.shape_at(self.kind, self.rotation)

    @property
    def color(self) -> int:
        return game.piece_color(self.kind)

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)


@dataclass(frozen=True)
class RenderState:
    grid: np.ndarray
    piece_cells: Tuple[Tuple[int, int, int], ...]  # (row, col, color)
    score: int
    lines: int
    level: int
    paused: bool
    game_over: bool
    mode: str
    preview: Tuple[str, ...]


class GameSession:
    """One game: board, active piece, bag and counters, driven by tick()."""

    def __init__(self, controller, bag: Optional[SevenBag] = None,
                 rules: Optional[ScoringRules] = None, seed: Optional[int] = None) -> None:
        self.controller = controller
        self.rules = rules or ScoringRules()
        self.seed = seed
        self.bag = bag or SevenBag(seed)
        self._reset_state()
        self.spawn()

    def _reset_state(self) -> None:
        self.grid = game.create_grid()
        self.piece: Optional[ActivePiece] = None
        self.phase = Phase.SPAWNING
        self.score = 0
        self.lines = 0
        self.level = 1
        self.pieces_placed = 0
        self.game_over = False
        self.paused = False
        self.gravity_timer = 0.0
        self.controller.reset()

    def restart(self) -> None:
        self.bag = SevenBag(self.seed)
        self._reset_state()
        self.spawn()

    # ----------------------------
    # Piece lifecycle
    # ----------------------------
    def collides(self, piece: ActivePiece) -> bool:
        return game.check_collision(self.grid, piece.shape, piece.x, piece.y)

    def spawn(self) -> bool:
        self.phase = Phase.SPAWNING
        kind = self.bag.next()
        self.piece = ActivePiece(kind, 0, game.cols // 2 - 2, 0)
        if self.collides(self.piece):
            self._end_game()
            return False
        self.phase = Phase.ACTIVE
        return True

    def _end_game(self) -> None:
        self.game_over = True
        self.phase = Phase.GAME_OVER

    def lock(self) -> int:
        self.phase = Phase.LOCKING
        piece = self.piece
        game.lock_piece(self.grid, piece.shape, piece.x, piece.y, piece.color)
        cleared = game.clear_lines(self.grid)
        self.pieces_placed += 1

        self.score += self.rules.score_for_lines(cleared, self.level)
        self.lines += cleared
        self.level = self.rules.level_for(self.lines)

        self.spawn()
        return cleared

    # ----------------------------
    # Moves
    # ----------------------------
    def try_move(self, dx: int, dy: int) -> bool:
        candidate = self.piece.moved(dx, dy)
        if self.collides(candidate):
            return False
        self.piece = candidate
        return True

    def rotate(self, delta: int) -> bool:
        """Rotate with a one-column kick: in place, then left, then right."""
        piece = self.piece
        new_rotation = (piece.rotation + delta) % game.state_count(piece.kind)
        for dx in (0, -1, 1):
            candidate = replace(piece, rotation=new_rotation, x=piece.x + dx)
            if not self.collides(candidate):
                self.piece = candidate
                return True
        return False

    def hard_drop(self) -> int:
        while self.try_move(0, 1):
            pass
        self.gravity_timer = 0.0
        return self.lock()

    def place_decision(self, decision: MoveDecision) -> bool:
        """Put the piece straight at the decided rest, or end the game."""
        if not is_placeable(decision):
            self._end_game()
            return False
        shape = game.shape_at(self.piece.kind, decision.rotation)
        y = game.get_drop_y(self.grid, shape, decision.column)
        if y is None:
            self._end_game()
            return False
        self.piece = replace(self.piece, rotation=decision.rotation, x=decision.column, y=y)
        self.lock()
        return True

    def apply(self, decision) -> None:
        if isinstance(decision, MoveDecision):
            self.place_decision(decision)
        elif decision == Action.LEFT:
            self.try_move(-1, 0)
        elif decision == Action.RIGHT:
            self.try_move(1, 0)
        elif decision == Action.SOFT_DROP:
            self.try_move(0, 1)
        elif decision == Action.ROTATE_CW:
            self.rotate(1)
        elif decision == Action.ROTATE_CCW:
            self.rotate(-1)
        elif decision == Action.HARD_DROP:
            self.hard_drop()
        else:
            raise ValueError(f"unknown decision {decision!r}")

    # ----------------------------
    # Frame update
    # ----------------------------
    def tick(self, dt: float, inputs: Optional[InputState] = None) -> None:
        inputs = inputs or InputState()
        if self.game_over:
            return

        if inputs.was_pressed(Key.PAUSE):
            self.paused = not self.paused
        if self.paused:
            return

        if self.controller.uses_gravity:
            self.gravity_timer += dt

        # Decisions first, gravity after
        for decision in self.controller.decide(self, inputs, dt):
            self.apply(decision)
            if self.game_over:
                return

        if self.controller.uses_gravity and self.gravity_timer >= gravity_delay(self.level):
            self.gravity_timer = 0.0
            if not self.try_move(0, 1):
                self.lock()

    def render_state(self, preview: int = PREVIEW_COUNT) -> RenderState:
        cells = ()
        if self.piece is not None and not self.game_over:
            color = self.piece.color
            cells = tuple(
                (r, c, color)
                for r, c in game.shape_cells(self.piece.shape, self.piece.x, self.piece.y)
                if r >= 0
            )
        return RenderState(
            grid=self.grid.copy(),
            piece_cells=cells,
            score=self.score,
            lines=self.lines,
            level=self.level,
            paused=self.paused,
            game_over=self.game_over,
            mode=self.controller.name,
            preview=tuple(self.bag.peek(preview)),
        )
