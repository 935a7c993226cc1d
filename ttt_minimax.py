import logging

from ttt_board import (
    Board,
    ImpossibleStateError,
    Mark,
    clear,
    empty_cells,
    has_win,
    is_full,
    place,
)

logger = logging.getLogger(__name__)

WIN_SCORE = 10


def minimax(board: Board, depth: int, maximizing: bool, ai: Mark, human: Mark) -> int:
    """
    Score ``board`` from ``ai``'s point of view assuming both sides play perfectly.

    Wins are worth ``10 - depth`` and losses ``depth - 10`` so the search
    prefers quicker wins and slower losses. The board is restored before
    returning.
    """
    if has_win(board, ai):
        return WIN_SCORE - depth
    if has_win(board, human):
        return depth - WIN_SCORE
    if is_full(board):
        return 0

    mover = ai if maximizing else human
    best = float("-inf") if maximizing else float("inf")
    for cell in empty_cells(board):
        place(board, cell, mover)
        try:
            score = minimax(board, depth + 1, not maximizing, ai, human)
        finally:
            clear(board, cell)
        best = max(best, score) if maximizing else min(best, score)
    return best


def best_move_by_minimax(board: Board, ai: Mark, human: Mark) -> int:
    """Optimal cell for ``ai``; on equal scores the lowest index wins."""
    best_score = float("-inf")
    best_cell = None

    for cell in empty_cells(board):
        place(board, cell, ai)
        try:
            score = minimax(board, 0, False, ai, human)
        finally:
            clear(board, cell)

        if score > best_score:
            best_score = score
            best_cell = cell

    if best_cell is None:
        raise ImpossibleStateError("Minimax search called on a board with no empty cells.")

    logger.debug("minimax picked cell %d for %s (score %d)", best_cell, ai.value, best_score)
    return best_cell
