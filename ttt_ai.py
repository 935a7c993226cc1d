import logging
import random
from enum import Enum
from typing import NamedTuple, Optional

import config as cfg
from ttt_board import (
    CENTER,
    CORNERS,
    EDGES,
    Board,
    Mark,
    clear,
    empty_cells,
    has_win,
    is_empty,
)
from ttt_minimax import best_move_by_minimax

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, name: str) -> "Difficulty":
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {name!r} (expected one of: {choices})") from None


class ComputerMove(NamedTuple):
    cell: Optional[int]
    smart: bool


def random_move(board: Board, rng=random) -> Optional[int]:
    empties = empty_cells(board)
    return rng.choice(empties) if empties else None


def _winning_cell(board: Board, mark: Mark, cells) -> Optional[int]:
    # Try each cell in order and undo right away
    for cell in cells:
        if not is_empty(board, cell):
            continue
        board[cell] = mark
        won = has_win(board, mark)
        clear(board, cell)
        if won:
            return cell
    return None


def heuristic_move(board: Board, ai: Mark, human: Mark, difficulty: Difficulty, rng=random) -> Optional[int]:
    """
    Tiered move chooser: win, block, (Hard: minimax), center, corner, edge.
    The board must have at least one empty cell.
    """
    # First priority: win immediately if possible
    cell = _winning_cell(board, ai, range(len(board)))
    if cell is not None:
        return cell

    # Second priority: block opponent's immediate win
    cell = _winning_cell(board, human, range(len(board)))
    if cell is not None:
        return cell

    if difficulty is Difficulty.HARD:
        return best_move_by_minimax(board, ai, human)

    if is_empty(board, CENTER):
        return CENTER

    open_corners = [c for c in CORNERS if is_empty(board, c)]
    if open_corners:
        cell = _winning_cell(board, ai, open_corners)
        if cell is not None:
            return cell
        return rng.choice(open_corners)

    open_edges = [c for c in EDGES if is_empty(board, c)]
    if open_edges:
        return rng.choice(open_edges)

    return random_move(board, rng)


def plan_computer_move(
    board: Board,
    difficulty: Difficulty,
    ai: Mark,
    human: Mark,
    rng=random,
) -> ComputerMove:
    """
    Pick the computer's next cell for ``difficulty``.

    ``smart`` tells whether the move came from the heuristic (and, on Hard,
    the search) rather than a random pick. ``cell`` is ``None`` when the
    board has no empty cell left, which callers treat as a draw.
    """
    if not empty_cells(board):
        return ComputerMove(None, False)

    if difficulty is Difficulty.EASY:
        cell, smart = random_move(board, rng), False
    elif difficulty is Difficulty.MEDIUM:
        smart = rng.random() < cfg.MEDIUM_SMART_PROBABILITY
        cell = heuristic_move(board, ai, human, difficulty, rng) if smart else random_move(board, rng)
    else:
        cell, smart = heuristic_move(board, ai, human, difficulty, rng), True

    if cell is None or not is_empty(board, cell):
        logger.warning("No usable move from %s policy (got %r), falling back to random", difficulty.value, cell)
        cell, smart = random_move(board, rng), False

    return ComputerMove(cell, smart)


def select_computer_move(
    board: Board,
    difficulty: Difficulty,
    computer: Mark,
    player: Mark,
    rng=random,
) -> Optional[int]:
    return plan_computer_move(board, difficulty, computer, player, rng).cell
