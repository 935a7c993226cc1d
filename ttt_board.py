from enum import Enum
from typing import List, NamedTuple, Optional, Tuple


class Mark(str, Enum):
    X = "X"
    O = "O"

    def opposite(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X


Cell = Optional[Mark]
Board = List[Cell]
WinLine = Tuple[int, int, int]

BOARD_CELLS = 9
CENTER = 4
CORNERS = (0, 2, 6, 8)
EDGES = (1, 3, 5, 7)

WIN_LINES: Tuple[WinLine, ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # cols
    (0, 4, 8), (2, 4, 6),             # diags
)


class TicTacToeError(Exception):
    pass


class IllegalMoveError(TicTacToeError, ValueError):
    """Move on an occupied cell or outside the 3x3 grid."""


class ImpossibleStateError(TicTacToeError, RuntimeError):
    """Search asked for a move on a board that has none."""


class Status(Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


class Outcome(NamedTuple):
    status: Status
    winner: Optional[Mark] = None
    line: Optional[WinLine] = None

    @property
    def is_over(self) -> bool:
        return self.status is not Status.IN_PROGRESS


IN_PROGRESS = Outcome(Status.IN_PROGRESS)
DRAW = Outcome(Status.DRAW)


def new_board() -> Board:
    return [None] * BOARD_CELLS


def _check_range(cell: int):
    if not 0 <= cell < BOARD_CELLS:
        raise IllegalMoveError(f"Cell {cell} is outside the board (0-8).")


def is_empty(board: Board, cell: int) -> bool:
    _check_range(cell)
    return board[cell] is None


def _check_cell(board: Board, cell: int):
    _check_range(cell)
    if board[cell] is not None:
        raise IllegalMoveError(f"Cell {cell} is already occupied by {board[cell].value}.")


def place(board: Board, cell: int, mark: Mark) -> Board:
    """Put ``mark`` on ``cell`` in place and return the same board."""
    _check_cell(board, cell)
    board[cell] = mark
    return board


def clear(board: Board, cell: int):
    board[cell] = None


def apply_move(board: Board, cell: int, mark: Mark) -> Board:
    """Like :func:`place` but returns a new board and leaves ``board`` alone."""
    return place(list(board), cell, mark)


def has_win(board: Board, mark: Mark) -> bool:
    for a, b, c in WIN_LINES:
        if board[a] == mark and board[b] == mark and board[c] == mark:
            return True
    return False


def winning_lines(board: Board) -> List[WinLine]:
    lines = []
    for a, b, c in WIN_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            lines.append((a, b, c))
    return lines


def empty_cells(board: Board) -> List[int]:
    return [i for i, c in enumerate(board) if c is None]


def is_full(board: Board) -> bool:
    return all(c is not None for c in board)


def is_draw(board: Board) -> bool:
    # A full board that contains a line is a win, not a draw
    if not is_full(board):
        return False
    return not has_win(board, Mark.X) and not has_win(board, Mark.O)


def check_outcome(board: Board) -> Outcome:
    lines = winning_lines(board)
    if lines:
        line = lines[0]
        return Outcome(Status.WIN, board[line[0]], line)
    if is_full(board):
        return DRAW
    return IN_PROGRESS


def board_from_string(text: str) -> Board:
    """
    Build a board from 9 characters, e.g. ``"XX.OO...."``.
    Anything other than X or O counts as empty.
    """
    cells = [ch for ch in text if not ch.isspace()]
    if len(cells) != BOARD_CELLS:
        raise ValueError(f"Expected {BOARD_CELLS} cells, got {len(cells)}.")
    return [Mark(ch) if ch in ("X", "O") else None for ch in cells]


def pretty(board: Board) -> str:
    b = [c.value if c is not None else " " for c in board]
    rows = [" | ".join(b[i:i + 3]) for i in range(0, 9, 3)]
    return "\n---------\n".join(rows)
