from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, FrozenSet, Iterable, List, Optional, Union

from ai_agent import AIAgent, MoveDecision
from config import AI_COOLDOWN, INPUT_REPEAT_DELAY

if TYPE_CHECKING:
    from game_session import GameSession


class Key(Enum):
    LEFT = "left"
    RIGHT = "right"
    SOFT_DROP = "soft_drop"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    HARD_DROP = "hard_drop"
    PAUSE = "pause"
    RESTART = "restart"
    CONFIRM = "confirm"
    MENU_UP = "menu_up"
    MENU_DOWN = "menu_down"
    CANCEL = "cancel"


@dataclass(frozen=True)
class InputState:
    """One frame of input: keys currently held and keys pressed this frame."""

    held: FrozenSet[Key] = frozenset()
    pressed: FrozenSet[Key] = frozenset()

    @classmethod
    def of(cls, held: Iterable[Key] = (), pressed: Iterable[Key] = ()) -> "InputState":
        return cls(frozenset(held), frozenset(pressed))

    def is_held(self, key: Key) -> bool:
        return key in self.held

    def was_pressed(self, key: Key) -> bool:
        return key in self.pressed


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    ROTATE_CW = 3
    ROTATE_CCW = 4
    HARD_DROP = 5


Decision = Union[Action, MoveDecision]


class ManualController:
    """Turns held/pressed keys into piece actions with a repeat delay."""

    name = "MANUAL"
    uses_gravity = True

    def __init__(self, repeat_delay: float = INPUT_REPEAT_DELAY) -> None:
        self.repeat_delay = repeat_delay
        self.reset()

    def reset(self) -> None:
        self.input_timer = 0.0
        self.left_held = False
        self.right_held = False
        self.down_held = False

    def _repeat(self, inputs: InputState, key: Key, was_held: bool) -> bool:
        # First press fires at once, then once per repeat delay while held
        if not inputs.is_held(key):
            return False
        if not was_held or self.input_timer >= self.repeat_delay:
            self.input_timer = 0.0
            return True
        return False

    def decide(self, session: "GameSession", inputs: InputState, dt: float) -> List[Decision]:
        actions: List[Decision] = []
        self.input_timer += dt

        if self._repeat(inputs, Key.LEFT, self.left_held):
            actions.append(Action.LEFT)
        self.left_held = inputs.is_held(Key.LEFT)

        if self._repeat(inputs, Key.RIGHT, self.right_held):
            actions.append(Action.RIGHT)
        self.right_held = inputs.is_held(Key.RIGHT)

        if self._repeat(inputs, Key.SOFT_DROP, self.down_held):
            actions.append(Action.SOFT_DROP)
        self.down_held = inputs.is_held(Key.SOFT_DROP)

        if inputs.was_pressed(Key.ROTATE_CW):
            actions.append(Action.ROTATE_CW)
        if inputs.was_pressed(Key.ROTATE_CCW):
            actions.append(Action.ROTATE_CCW)
        if inputs.was_pressed(Key.HARD_DROP):
            actions.append(Action.HARD_DROP)
        return actions


class AIController:
    """Asks the placement search for a move once per cooldown."""

    name = "AI"
    uses_gravity = False

    def __init__(self, agent: Optional[AIAgent] = None, cooldown: float = AI_COOLDOWN) -> None:
        self.agent = agent or AIAgent()
        self.cooldown = cooldown
        self.reset()

    def reset(self) -> None:
        self.timer = 0.0

    def decide(self, session: "GameSession", inputs: InputState, dt: float) -> List[Decision]:
        self.timer += dt
        if self.timer < self.cooldown:
            return []
        self.timer = 0.0
        return [self.agent.choose_action(session.grid, session.piece.kind)]
