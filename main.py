import argparse
import logging
import random
import time

import pygame

import config as cfg
from ttt_ai import Difficulty
from ttt_board import Mark
from ttt_game import TicTacToeGame
from ui_state import DIFFICULTIES, SYMBOLS, Phase, UIState

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Tic-Tac-Toe against the computer")
    p.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=None,
                   help="skip the difficulty screen")
    p.add_argument("--symbol", choices=[m.value for m in Mark], default=None,
                   help="skip the symbol screen on every round (X always moves first)")
    p.add_argument("--seed", type=int, default=None, help="seed for the computer's random choices")
    p.add_argument("--log-level", default=cfg.LOG_LEVEL,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging verbosity")
    return p.parse_args(argv)


def option_rects(screen, count):
    # Options are laid out side by side in the middle of the window
    w = screen.get_width()
    box_w, box_h, gap = 180, 110, 30
    total = count * box_w + (count - 1) * gap
    x = (w - total) / 2
    return [pygame.Rect(x + i * (box_w + gap), 320, box_w, box_h) for i in range(count)]


def draw_options(screen, font_big, font_small, title, hint, labels, selected_index, footer=None):
    screen.fill(cfg.BG_COLOR)
    text = font_big.render(title, True, cfg.MARK_COLOR)
    screen.blit(text, (screen.get_width() / 2 - text.get_width() / 2, 140))

    hint_text = font_small.render(hint, True, cfg.TEXT_COLOR)
    screen.blit(hint_text, (screen.get_width() / 2 - hint_text.get_width() / 2, 230))

    for i, (rect, label) in enumerate(zip(option_rects(screen, len(labels)), labels)):
        col = cfg.SELECT_COLOR if i == selected_index else cfg.GRID_COLOR
        pygame.draw.rect(screen, col, rect, 4)
        lt = font_small.render(label, True, col)
        screen.blit(lt, (rect.centerx - lt.get_width() / 2, rect.centery - lt.get_height() / 2))

    if footer:
        ft = font_small.render(footer, True, cfg.TEXT_COLOR)
        screen.blit(ft, (screen.get_width() / 2 - ft.get_width() / 2, 480))


def clicked_option(screen, pos, count):
    for i, rect in enumerate(option_rects(screen, count)):
        if rect.collidepoint(pos):
            return i
    return None


def draw_frame(screen, fonts, state: UIState, game: TicTacToeGame, notice=None):
    font_big, font_mark, font_small = fonts
    if state.phase is Phase.DIFFICULTY:
        labels = [d.label for d in DIFFICULTIES]
        draw_options(screen, font_big, font_small, "Select Difficulty",
                     "LEFT/RIGHT or 1-3 to choose, Enter or click to confirm.",
                     labels, DIFFICULTIES.index(state.difficulty))
    elif state.phase is Phase.SYMBOL:
        footer = None
        if state.symbol_chosen_at is not None:
            footer = f"You play {state.symbol.value}. X moves first."
        draw_options(screen, font_big, font_small, "Choose Your Symbol",
                     f"Difficulty: {state.difficulty.label}. X/O, Enter or click. D = back.",
                     [m.value for m in SYMBOLS], SYMBOLS.index(state.symbol), footer)
    else:
        status = notice or game.status_text()
        if game.is_over:
            status += "  R = play again, D = change difficulty"
        game.draw(screen, status, font_mark, font_small)


def start_round(game: TicTacToeGame, state: UIState):
    game.difficulty = state.difficulty
    game.player_mark = state.symbol
    game.reset()
    state.start_playing()
    logger.info("New game: difficulty=%s, player=%s, computer=%s",
                game.difficulty.value, game.player_mark.value, game.computer_mark.value)


def begin_computer_turn(state: UIState, game: TicTacToeGame, now, show_thinking=None) -> bool:
    """
    Decide the computer's move now and schedule it for after the thinking pause.
    ``show_thinking`` runs first so the window shows the status during a long search.
    """
    if not game.is_computer_turn() or state.computer_pending():
        return False
    if show_thinking is not None:
        show_thinking()
    state.schedule_computer(now, game.plan_computer_move())
    return True


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=cfg.LOG_FORMAT)

    rng = random.Random(args.seed)
    state = UIState.from_options(args.difficulty, args.symbol)
    game = TicTacToeGame(difficulty=state.difficulty, rng=rng)

    pygame.init()
    screen = pygame.display.set_mode((cfg.WIN_W, cfg.WIN_H))
    pygame.display.set_caption(cfg.TITLE)
    clock = pygame.time.Clock()
    fonts = (
        pygame.font.SysFont(None, cfg.FONT_BIG),
        pygame.font.SysFont(None, cfg.FONT_MARK),
        pygame.font.SysFont(None, cfg.FONT_SMALL),
    )

    notice = None
    running = True

    while running:
        clock.tick(cfg.FPS)
        now = time.time()

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                continue

            if event.type == pygame.KEYDOWN and event.key == pygame.K_q:
                running = False
                continue

            if state.phase is Phase.DIFFICULTY:
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_LEFT:
                        state.cycle_difficulty(-1)
                    elif event.key == pygame.K_RIGHT:
                        state.cycle_difficulty(1)
                    elif event.key in (pygame.K_1, pygame.K_2, pygame.K_3):
                        state.difficulty = DIFFICULTIES[event.key - pygame.K_1]
                        state.to_symbol()
                    elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                        state.to_symbol()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    i = clicked_option(screen, event.pos, len(DIFFICULTIES))
                    if i is not None:
                        state.difficulty = DIFFICULTIES[i]
                        state.to_symbol()

            elif state.phase is Phase.SYMBOL:
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_LEFT:
                        state.cycle_symbol(-1)
                    elif event.key == pygame.K_RIGHT:
                        state.cycle_symbol(1)
                    elif event.key == pygame.K_x:
                        state.choose_symbol(now, Mark.X)
                    elif event.key == pygame.K_o:
                        state.choose_symbol(now, Mark.O)
                    elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                        state.choose_symbol(now)
                    elif event.key == pygame.K_d:
                        state.to_difficulty()
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    i = clicked_option(screen, event.pos, len(SYMBOLS))
                    if i is not None:
                        state.choose_symbol(now, SYMBOLS[i])

            else:
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_r:
                        notice = None
                        state.to_symbol()
                    elif event.key == pygame.K_d:
                        notice = None
                        state.to_difficulty()
                    elif event.key == pygame.K_LEFT:
                        game.move_cursor(-1, 0)
                    elif event.key == pygame.K_RIGHT:
                        game.move_cursor(1, 0)
                    elif event.key == pygame.K_UP:
                        game.move_cursor(0, -1)
                    elif event.key == pygame.K_DOWN:
                        game.move_cursor(0, 1)
                    elif event.key in (pygame.K_RETURN, pygame.K_SPACE) and game.is_player_turn():
                        notice = None if game.place_player() else "Cell taken. Pick an empty cell."
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and game.is_player_turn():
                    cell = game.cell_at(event.pos, screen.get_size())
                    if cell is not None:
                        game.cursor = list(divmod(cell, 3))
                        notice = None if game.place_player(cell) else "Cell taken. Pick an empty cell."

        if state.phase is Phase.SYMBOL and state.symbol_ready(now):
            start_round(game, state)

        if state.phase is Phase.PLAYING:
            def show_thinking():
                draw_frame(screen, fonts, state, game, notice)
                pygame.display.flip()
                pygame.event.pump()

            begin_computer_turn(state, game, now, show_thinking)
            due = state.take_due_move(now)
            if due is not None:
                game.apply_computer_move(due)

        draw_frame(screen, fonts, state, game, notice)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
