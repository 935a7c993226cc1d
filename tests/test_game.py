"""Tests for the game session and the screen flow state."""

import random

import config as cfg
from main import begin_computer_turn, parse_args, start_round
from ttt_ai import ComputerMove, Difficulty
from ttt_board import Mark, Status, board_from_string
from ttt_game import TicTacToeGame
from ui_state import Phase, UIState

X, O = Mark.X, Mark.O


def test_player_x_moves_first():
    game = TicTacToeGame(Difficulty.EASY, X, random.Random(0))
    assert game.is_player_turn()
    assert game.status_text() == "Your turn (X)"
    assert game.plan_computer_move() is None


def test_computer_opens_when_player_is_o():
    game = TicTacToeGame(Difficulty.EASY, O, random.Random(0))
    assert game.is_computer_turn()
    assert game.status_text() == "AI is thinking..."
    assert not game.place_player(4)

    game.maybe_ai_turn()
    assert game.board.count(X) == 1
    assert game.is_player_turn()


def test_cursor_placement_and_occupied_cell():
    game = TicTacToeGame(Difficulty.EASY, X, random.Random(0))
    game.move_cursor(1, -1)
    assert game.cursor == [0, 2]
    assert game.place_player()
    assert game.board[2] is X
    assert game.is_computer_turn()

    game.apply_computer_move(ComputerMove(4, True))
    assert game.last_computer_cell == 4
    assert not game.place_player(4)
    assert game.is_player_turn()


def test_cursor_stays_on_board():
    game = TicTacToeGame()
    for _ in range(5):
        game.move_cursor(-1, 1)
    assert game.cursor == [2, 0]


def test_player_win_ends_game():
    game = TicTacToeGame(Difficulty.EASY, X, random.Random(0))
    game.board = board_from_string("XX.OO....")
    assert game.place_player(2)
    assert game.winner is X
    assert game.win_line == (0, 1, 2)
    assert game.status_text() == "You Win!"
    assert not game.is_computer_turn()


def test_computer_win_ends_game():
    game = TicTacToeGame(Difficulty.HARD, X, random.Random(0))
    game.board = board_from_string("X.XOO...X")
    game.turn = O
    game.maybe_ai_turn()
    assert game.board[5] is O
    assert game.status_text() == "AI Wins!"


def test_no_computer_move_is_a_draw():
    game = TicTacToeGame(Difficulty.EASY, O, random.Random(0))
    game.apply_computer_move(ComputerMove(None, False))
    assert game.outcome.status is Status.DRAW
    assert game.status_text() == "Game ended in a draw!"


def test_reset_clears_round():
    game = TicTacToeGame(Difficulty.EASY, X, random.Random(0))
    game.place_player(0)
    game.reset()
    assert game.board == [None] * 9
    assert game.turn is X
    assert not game.is_over


def test_cell_at_maps_clicks():
    game = TicTacToeGame()
    size = (720, 720)
    assert game.cell_at((80, 80), size) == 0
    assert game.cell_at((360, 360), size) == 4
    assert game.cell_at((640, 640), size) == 8
    assert game.cell_at((10, 10), size) is None


def test_difficulty_cycles():
    state = UIState()
    assert state.phase is Phase.DIFFICULTY
    state.cycle_difficulty(1)
    assert state.difficulty is Difficulty.HARD
    state.cycle_difficulty(1)
    assert state.difficulty is Difficulty.EASY


def test_symbol_choice_waits_before_start():
    state = UIState()
    state.to_symbol()
    assert not state.symbol_ready(100.0)

    state.choose_symbol(100.0, O)
    state.choose_symbol(100.1, X)
    assert state.symbol is O
    assert not state.symbol_ready(100.0 + cfg.SYMBOL_START_DELAY / 2)
    assert state.symbol_ready(100.0 + cfg.SYMBOL_START_DELAY)

    state.start_playing()
    assert state.phase is Phase.PLAYING


def test_computer_move_revealed_after_delay():
    state = UIState()
    smart = ComputerMove(3, True)
    state.schedule_computer(10.0, smart)
    assert state.computer_pending()

    due = 10.0 + cfg.COMPUTER_TURN_DELAY + cfg.SMART_MOVE_DELAY
    assert state.take_due_move(due - 0.01) is None
    assert state.take_due_move(due) == smart
    assert not state.computer_pending()

    state.schedule_computer(10.0, ComputerMove(1, False))
    assert state.take_due_move(10.0 + cfg.COMPUTER_TURN_DELAY + cfg.RANDOM_MOVE_DELAY) is not None


def test_leaving_play_drops_pending_move():
    state = UIState()
    state.start_playing()
    state.schedule_computer(0.0, ComputerMove(0, False))
    state.to_difficulty()
    assert state.phase is Phase.DIFFICULTY
    assert not state.computer_pending()


def test_no_options_start_on_difficulty_screen():
    state = UIState.from_options()
    assert state.phase is Phase.DIFFICULTY
    assert state.difficulty is Difficulty.parse(cfg.DEFAULT_DIFFICULTY)
    assert not state.symbol_ready(0.0)


def test_difficulty_option_skips_difficulty_screen():
    state = UIState.from_options("hard", None)
    assert state.phase is Phase.SYMBOL
    assert state.difficulty is Difficulty.HARD
    assert not state.symbol_ready(0.0)


def test_symbol_option_skips_symbol_screen():
    state = UIState.from_options(None, "O")
    assert state.phase is Phase.DIFFICULTY

    state.cycle_difficulty(1)
    state.to_symbol()
    assert state.symbol_ready(0.0)
    assert state.symbol is O

    # Restarting a round skips it again
    state.start_playing()
    state.to_symbol()
    assert state.symbol_ready(0.0)


def test_both_options_start_playing_at_once():
    game = TicTacToeGame(rng=random.Random(0))
    state = UIState.from_options("easy", "O")
    assert state.phase is Phase.SYMBOL
    assert state.symbol_ready(0.0)

    start_round(game, state)
    assert state.phase is Phase.PLAYING
    assert game.difficulty is Difficulty.EASY
    assert game.player_mark is O
    assert game.is_computer_turn()


def test_thinking_status_shown_before_search():
    game = TicTacToeGame(Difficulty.EASY, O, random.Random(0))
    state = UIState()
    state.start_playing()
    seen = []

    def show_thinking():
        seen.append((game.status_text(), state.computer_pending()))

    assert begin_computer_turn(state, game, 5.0, show_thinking)
    assert seen == [("AI is thinking...", False)]
    assert state.computer_pending()

    # Already scheduled: nothing is redrawn or searched again
    assert not begin_computer_turn(state, game, 5.1, show_thinking)
    assert len(seen) == 1


def test_no_computer_turn_when_player_moves():
    game = TicTacToeGame(Difficulty.EASY, X, random.Random(0))
    state = UIState()
    assert not begin_computer_turn(state, game, 0.0, lambda: None)
    assert not state.computer_pending()


def test_parse_args():
    args = parse_args(["--difficulty", "hard", "--symbol", "O", "--seed", "3"])
    assert args.difficulty == "hard"
    assert args.symbol == "O"
    assert args.seed == 3
    assert parse_args([]).log_level == cfg.LOG_LEVEL
