from controllers import AIController, InputState, Key, ManualController
from menu import App, INSTRUCTIONS, MENU_OPTIONS, Screen


def press(*keys):
    return InputState.of(held=keys, pressed=keys)


NOTHING = InputState()


def test_starts_on_main_menu():
    app = App()
    assert app.screen == Screen.MAIN_MENU
    assert app.running
    assert app.session is None


def test_main_menu_selection_wraps():
    app = App()
    app.tick(0.0, press(Key.MENU_UP))
    assert app.menu_index == len(MENU_OPTIONS) - 1
    app.tick(0.0, press(Key.MENU_DOWN))
    assert app.menu_index == 0


def test_quit_stops_the_app():
    app = App()
    app.tick(0.0, press(Key.MENU_UP))
    app.tick(0.0, press(Key.CONFIRM))
    assert not app.running
    app.tick(0.0, press(Key.MENU_DOWN))
    assert app.menu_index == 2


def test_instructions_round_trip():
    app = App()
    app.tick(0.0, press(Key.MENU_DOWN))
    app.tick(0.0, press(Key.CONFIRM))
    assert app.screen == Screen.INSTRUCTIONS
    app.tick(0.0, press(Key.CANCEL))
    assert app.screen == Screen.MAIN_MENU
    assert any(action == "Hard drop" for _, action in INSTRUCTIONS)


def test_start_manual_game():
    app = App(seed=1)
    app.tick(0.0, press(Key.CONFIRM))
    assert app.screen == Screen.MODE_SELECT
    assert not app.ai_selected
    app.tick(0.0, press(Key.CONFIRM))
    assert app.screen == Screen.PLAYING
    assert isinstance(app.session.controller, ManualController)


def test_start_ai_game_with_weights():
    app = App(weights={"holes": -0.9}, seed=1)
    app.tick(0.0, press(Key.CONFIRM))
    app.tick(0.0, press(Key.MENU_DOWN))
    assert app.ai_selected
    app.tick(0.0, press(Key.CONFIRM))
    controller = app.session.controller
    assert isinstance(controller, AIController)
    assert controller.agent.weights["holes"] == -0.9


def test_mode_select_cancel_returns_to_menu():
    app = App()
    app.tick(0.0, press(Key.CONFIRM))
    app.tick(0.0, press(Key.MENU_UP))
    app.tick(0.0, press(Key.CANCEL))
    assert app.screen == Screen.MAIN_MENU
    assert app.session is None


def test_playing_forwards_ticks_to_the_session():
    app = App(seed=2)
    app.tick(0.0, press(Key.CONFIRM))
    app.tick(0.0, press(Key.CONFIRM))
    app.tick(0.0, press(Key.HARD_DROP))
    assert app.session.pieces_placed == 1


def test_cancel_during_play_discards_the_session():
    app = App(seed=2)
    app.tick(0.0, press(Key.CONFIRM))
    app.tick(0.0, press(Key.CONFIRM))
    app.tick(0.0, press(Key.CANCEL))
    assert app.screen == Screen.MAIN_MENU
    assert app.session is None


def test_restart_after_game_over():
    app = App(seed=4)
    app.tick(0.0, press(Key.CONFIRM))
    app.tick(0.0, press(Key.CONFIRM))
    session = app.session
    session.grid[0:2, :] = 1
    session.grid[0:2, 0] = 0
    session.spawn()
    assert session.game_over

    app.tick(1.0, NOTHING)
    assert session.game_over

    app.tick(0.0, press(Key.RESTART))
    assert app.session is session
    assert not session.game_over
    assert not session.grid.any()
