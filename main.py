import os
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"
import argparse
import math
import warnings
warnings.filterwarnings("ignore", category=UserWarning, module="pygame.pkgdata")
import pygame
import sys
from typing import Dict, List, Set

import core_game as game
from config import (FPS, PALETTE, PREVIEW_COUNT, bg_color, block_size, board_x, board_y,
                    height, load_weights, menu_bg_color, width)
from controllers import InputState, Key
from game_session import RenderState
from menu import App, INSTRUCTIONS, MENU_OPTIONS, MODE_OPTIONS, Screen

window = None
font = None
big_font = None
title_font = None

KEY_MAP: Dict[int, List[Key]] = {
    pygame.K_LEFT: [Key.LEFT],
    pygame.K_RIGHT: [Key.RIGHT],
    pygame.K_DOWN: [Key.SOFT_DROP, Key.MENU_DOWN],
    pygame.K_UP: [Key.ROTATE_CW, Key.MENU_UP],
    pygame.K_x: [Key.ROTATE_CW],
    pygame.K_z: [Key.ROTATE_CCW],
    pygame.K_SPACE: [Key.HARD_DROP],
    pygame.K_p: [Key.PAUSE],
    pygame.K_r: [Key.RESTART],
    pygame.K_RETURN: [Key.CONFIRM],
    pygame.K_ESCAPE: [Key.CANCEL],
}


def read_input(events) -> InputState:
    """Snapshot of held keys plus the keys pressed during this frame."""
    state = pygame.key.get_pressed()
    held: Set[Key] = set()
    pressed: Set[Key] = set()
    for code, keys in KEY_MAP.items():
        if state[code]:
            held.update(keys)
    for event in events:
        if event.type == pygame.KEYDOWN and event.key in KEY_MAP:
            pressed.update(KEY_MAP[event.key])
    return InputState.of(held, pressed)


def draw_text_centered(surface, text, fnt, color, y):
    label = fnt.render(text, True, color)
    surface.blit(label, (width // 2 - label.get_width() // 2, y))


def draw_cell(surface, x, y, size, color_id):
    rect = pygame.Rect(x, y, size - 2, size - 2)
    pygame.draw.rect(surface, PALETTE[color_id], rect)


def drawGrid(surface, grid):
    frame = pygame.Rect(board_x - 4, board_y - 4, game.cols * block_size + 8, game.rows * block_size + 8)
    pygame.draw.rect(surface, (80, 80, 80), frame)
    pygame.draw.rect(surface, (200, 200, 200),
                     (board_x, board_y, game.cols * block_size, game.rows * block_size))
    for row in range(game.rows):
        for col in range(game.cols):
            cell = int(grid[row][col])
            if cell:
                draw_cell(surface, board_x + col * block_size, board_y + row * block_size, block_size, cell)
    for i in range(game.cols + 1):
        x = board_x + i * block_size
        pygame.draw.line(surface, (170, 170, 170), (x, board_y), (x, board_y + game.rows * block_size))
    for i in range(game.rows + 1):
        y = board_y + i * block_size
        pygame.draw.line(surface, (170, 170, 170), (board_x, y), (board_x + game.cols * block_size, y))


def drawTetromino(surface, cells):
    for row, col, color in cells:
        draw_cell(surface, board_x + col * block_size, board_y + row * block_size, block_size, color)


def draw_next_piece(surface, preview, x, y):
    label = font.render("Next:", True, (255, 255, 255))
    surface.blit(label, (x, y))
    y += 30
    for slot, kind in enumerate(preview):
        shape = game.shape_at(kind, 0)
        for i, row in enumerate(shape):
            for j, cell in enumerate(row):
                if cell:
                    draw_cell(surface, x + 40 + j * 12, y + i * 12 + slot * 50, 12, game.piece_color(kind))


def draw_info(surface, state: RenderState):
    x = board_x + game.cols * block_size + 20
    y = board_y
    surface.blit(font.render(f"Mode: {state.mode}", True, (253, 249, 0)), (x, y))
    surface.blit(big_font.render(f"Score: {state.score}", True, (255, 255, 255)), (x, y + 28))
    surface.blit(font.render(f"Lines: {state.lines}", True, (255, 255, 255)), (x, y + 56))
    surface.blit(font.render(f"Level: {state.level}", True, (255, 255, 255)), (x, y + 80))
    draw_next_piece(surface, state.preview, x, y + 120)

    help_y = y + 440
    for key, action in INSTRUCTIONS:
        surface.blit(font.render(f"{key}: {action}", True, (102, 191, 255)), (x, help_y))
        help_y += 18

    if state.paused:
        shade = pygame.Surface((width, 80), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 128))
        surface.blit(shade, (0, height // 2 - 40))
        draw_text_centered(surface, "PAUSED", title_font, (253, 249, 0), height // 2 - 20)

    if state.game_over:
        shade = pygame.Surface((width, 160), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 180))
        surface.blit(shade, (0, height // 2 - 80))
        draw_text_centered(surface, "GAME OVER", title_font, (230, 41, 55), height // 2 - 50)
        draw_text_centered(surface, f"Score: {state.score}  Lines: {state.lines}  Level: {state.level}",
                           big_font, (255, 255, 255), height // 2 + 10)
        draw_text_centered(surface, "R: Restart   ESC: Menu", font, (200, 200, 200), height // 2 + 50)


def draw_menu(surface, options, selected, title, anim_time=0.0):
    surface.fill(menu_bg_color)
    title_y = 120 + int(math.sin(anim_time * 2) * 5)
    draw_text_centered(surface, title, title_font, (102, 191, 255), title_y)
    for i, option in enumerate(options):
        color = (253, 249, 0) if i == selected else (255, 255, 255)
        text = f"> {option}" if i == selected else option
        draw_text_centered(surface, text, big_font, color, 320 + i * 80)
    draw_text_centered(surface, "Use UP/DOWN arrows and ENTER to select", font, (200, 200, 200), height - 80)


def draw_instructions(surface):
    surface.fill(menu_bg_color)
    draw_text_centered(surface, "INSTRUCTIONS", title_font, (102, 191, 255), 60)
    y = 140
    for key, action in INSTRUCTIONS:
        surface.blit(big_font.render(key, True, (253, 249, 0)), (120, y))
        surface.blit(big_font.render(f"-  {action}", True, (255, 255, 255)), (280, y))
        y += 35
    surface.blit(big_font.render("OBJECTIVE:", True, (102, 191, 255)), (120, y + 20))
    for line in ("Clear lines by filling rows completely.",
                 "Game speeds up every 10 lines.",
                 "Don't let blocks reach the top!"):
        y += 30
        surface.blit(font.render(line, True, (200, 200, 200)), (120, y + 30))
    draw_text_centered(surface, "Press ENTER to return to menu", font, (253, 249, 0), height - 60)


def draw_game(surface, state: RenderState):
    surface.fill(bg_color)
    drawGrid(surface, state.grid)
    drawTetromino(surface, state.piece_cells)
    draw_info(surface, state)


def draw_app(surface, app: App, anim_time: float):
    if app.screen == Screen.MAIN_MENU:
        draw_menu(surface, MENU_OPTIONS, app.menu_index, "TETRIS", anim_time)
    elif app.screen == Screen.INSTRUCTIONS:
        draw_instructions(surface)
    elif app.screen == Screen.MODE_SELECT:
        draw_menu(surface, MODE_OPTIONS, app.mode_index, "SELECT GAME MODE")
    elif app.screen == Screen.PLAYING:
        draw_game(surface, app.session.render_state(PREVIEW_COUNT))
    else:
        raise ValueError(f"unknown screen {app.screen}")


def game_loop(window, app: App):
    clock = pygame.time.Clock()
    anim_time = 0.0
    while app.running:
        dt = clock.tick(FPS) / 1000.0
        anim_time += dt

        events = pygame.event.get()
        if any(event.type == pygame.QUIT for event in events):
            break

        app.tick(dt, read_input(events))
        if not app.running:
            break

        draw_app(window, app, anim_time)
        pygame.display.update()

    pygame.quit()
    sys.exit()


def main():
    global window, font, big_font, title_font
    parser = argparse.ArgumentParser(description="Tetris with manual and heuristic AI modes")
    parser.add_argument("--weights", type=str, default=None, help="JSON file with heuristic weights")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece bag")
    args = parser.parse_args()

    weights = load_weights(args.weights) if args.weights else None

    pygame.init()
    window = pygame.display.set_mode((width, height))
    pygame.display.set_caption("Tetris - Manual & AI Modes")
    font = pygame.font.Font(None, 20)
    big_font = pygame.font.Font(None, 30)
    title_font = pygame.font.Font(None, 64)

    game_loop(window, App(weights=weights, seed=args.seed))


if __name__ == "__main__":
    main()
