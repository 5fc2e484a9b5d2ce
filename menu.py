from __future__ import annotations

from enum import Enum, auto
from typing import Callable, Dict, Optional

from ai_agent import AIAgent
from controllers import AIController, InputState, Key, ManualController
from game_session import GameSession

MENU_OPTIONS = ("Start Game", "Instructions", "Quit")
MODE_OPTIONS = ("Manual (Player Controlled)", "AI (Automatic Placement)")

INSTRUCTIONS = (
    ("LEFT/RIGHT", "Move piece"),
    ("DOWN", "Soft drop"),
    ("UP or X", "Rotate clockwise"),
    ("Z", "Rotate counter-clockwise"),
    ("SPACE", "Hard drop"),
    ("P", "Pause game"),
    ("R", "Restart after game over"),
    ("ESC", "Return to menu"),
)


class Screen(Enum):
    MAIN_MENU = auto()
    INSTRUCTIONS = auto()
    MODE_SELECT = auto()
    PLAYING = auto()


class App:
    """Screen flow around a GameSession: menu, instructions, mode select, play."""

    def __init__(self, weights: Optional[Dict[str, float]] = None, seed: Optional[int] = None) -> None:
        self.weights = weights
        self.seed = seed
        self.screen = Screen.MAIN_MENU
        self.menu_index = 0
        self.mode_index = 0
        self.session: Optional[GameSession] = None
        self.running = True
        self._handlers: Dict[Screen, Callable[[float, InputState], None]] = {
            Screen.MAIN_MENU: self._tick_main_menu,
            Screen.INSTRUCTIONS: self._tick_instructions,
            Screen.MODE_SELECT: self._tick_mode_select,
            Screen.PLAYING: self._tick_playing,
        }

    @property
    def ai_selected(self) -> bool:
        return self.mode_index == 1

    def new_session(self) -> GameSession:
        if self.ai_selected:
            controller = AIController(AIAgent(self.weights))
        else:
            controller = ManualController()
        return GameSession(controller, seed=self.seed)

    def back_to_menu(self) -> None:
        self.screen = Screen.MAIN_MENU
        self.menu_index = 0
        self.session = None

    def tick(self, dt: float, inputs: InputState) -> None:
        if not self.running:
            return
        self._handlers[self.screen](dt, inputs)

    def _tick_main_menu(self, dt: float, inputs: InputState) -> None:
        n = len(MENU_OPTIONS)
        if inputs.was_pressed(Key.MENU_UP):
            self.menu_index = (self.menu_index - 1) % n
        if inputs.was_pressed(Key.MENU_DOWN):
            self.menu_index = (self.menu_index + 1) % n
        if inputs.was_pressed(Key.CONFIRM):
            choice = MENU_OPTIONS[self.menu_index]
            if choice == "Start Game":
                self.screen = Screen.MODE_SELECT
                self.mode_index = 0
            elif choice == "Instructions":
                self.screen = Screen.INSTRUCTIONS
            else:
                self.running = False

    def _tick_instructions(self, dt: float, inputs: InputState) -> None:
        if inputs.was_pressed(Key.CONFIRM) or inputs.was_pressed(Key.CANCEL):
            self.screen = Screen.MAIN_MENU

    def _tick_mode_select(self, dt: float, inputs: InputState) -> None:
        # Two entries: up and down both toggle
        if inputs.was_pressed(Key.MENU_UP) or inputs.was_pressed(Key.MENU_DOWN):
            self.mode_index = 1 - self.mode_index
        if inputs.was_pressed(Key.CONFIRM):
            self.session = self.new_session()
            self.screen = Screen.PLAYING
        elif inputs.was_pressed(Key.CANCEL):
            self.back_to_menu()

    def _tick_playing(self, dt: float, inputs: InputState) -> None:
        if inputs.was_pressed(Key.CANCEL):
            self.back_to_menu()
            return
        if self.session.game_over:
            if inputs.was_pressed(Key.RESTART) or inputs.was_pressed(Key.CONFIRM):
                self.session.restart()
            return
        self.session.tick(dt, inputs)
