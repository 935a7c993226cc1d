import logging
import random
from typing import Optional

import pygame

import config as cfg
from ttt_ai import ComputerMove, Difficulty, plan_computer_move
from ttt_board import (
    DRAW,
    IN_PROGRESS,
    IllegalMoveError,
    Mark,
    Status,
    check_outcome,
    new_board,
    place,
    pretty,
)

logger = logging.getLogger(__name__)


class TicTacToeGame:
    def __init__(self, difficulty=Difficulty.MEDIUM, player_mark=Mark.X, rng=None):
        # Difficulty and marks are fixed for a round; change them between rounds only
        self.difficulty = difficulty
        self.player_mark = player_mark
        self.rng = rng if rng is not None else random.Random()
        self.reset()

    @property
    def computer_mark(self) -> Mark:
        return self.player_mark.opposite()

    def reset(self):
        self.board = new_board()
        self.cursor = [1, 1]
        self.turn = Mark.X  # X always opens
        self.outcome = IN_PROGRESS
        self.last_computer_cell = None

    @property
    def is_over(self) -> bool:
        return self.outcome.is_over

    @property
    def winner(self) -> Optional[Mark]:
        return self.outcome.winner

    @property
    def win_line(self):
        return self.outcome.line

    def is_player_turn(self) -> bool:
        return not self.is_over and self.turn == self.player_mark

    def is_computer_turn(self) -> bool:
        return not self.is_over and self.turn == self.computer_mark

    def status_text(self) -> str:
        if self.outcome.status is Status.DRAW:
            return "Game ended in a draw!"
        if self.outcome.status is Status.WIN:
            return "You Win!" if self.winner == self.player_mark else "AI Wins!"
        if self.is_player_turn():
            return f"Your turn ({self.player_mark.value})"
        return "AI is thinking..."

    def _finish_turn(self):
        self.outcome = check_outcome(self.board)
        if self.is_over:
            logger.info("Game over (%s, winner=%s, line=%s)\n%s",
                        self.outcome.status.value,
                        self.winner.value if self.winner else None,
                        self.win_line,
                        pretty(self.board))
        else:
            self.turn = self.turn.opposite()

    def place_player(self, cell: Optional[int] = None) -> bool:
        """
        Place the player's mark on ``cell`` (or the cursor cell).
        Returns False when it is not the player's turn or the cell is taken.
        """
        if not self.is_player_turn():
            return False
        if cell is None:
            r, c = self.cursor
            cell = r * 3 + c

        try:
            place(self.board, cell, self.player_mark)
        except IllegalMoveError as e:
            logger.debug("Rejected player move: %s", e)
            return False

        logger.info("Player %s -> cell %d", self.player_mark.value, cell)
        self._finish_turn()
        return True

    def plan_computer_move(self) -> Optional[ComputerMove]:
        if not self.is_computer_turn():
            return None
        return plan_computer_move(self.board, self.difficulty, self.computer_mark, self.player_mark, self.rng)

    def apply_computer_move(self, move: ComputerMove):
        if not self.is_computer_turn():
            return
        if move.cell is None:
            # Nothing left to play
            self.outcome = DRAW
            logger.info("Computer has no move left, declaring a draw")
            return

        place(self.board, move.cell, self.computer_mark)
        self.last_computer_cell = move.cell
        logger.info("Computer %s (%s, %s) -> cell %d",
                    self.computer_mark.value, self.difficulty.value,
                    "smart" if move.smart else "random", move.cell)
        self._finish_turn()

    def maybe_ai_turn(self):
        move = self.plan_computer_move()
        if move is not None:
            self.apply_computer_move(move)

    def move_cursor(self, dx, dy):
        self.cursor[1] = max(0, min(2, self.cursor[1] + dx))
        self.cursor[0] = max(0, min(2, self.cursor[0] + dy))

    @staticmethod
    def grid_geometry(w, h):
        grid_size = min(w, h) * 0.8
        x0 = (w - grid_size) / 2
        y0 = (h - grid_size) / 2
        return x0, y0, grid_size / 3

    def cell_at(self, pos, size) -> Optional[int]:
        x0, y0, cell = self.grid_geometry(*size)
        col = int((pos[0] - x0) // cell)
        row = int((pos[1] - y0) // cell)
        if 0 <= row < 3 and 0 <= col < 3:
            return row * 3 + col
        return None

    def draw(self, screen, status_text, font_big, font_small):
        screen.fill(cfg.BG_COLOR)
        w, h = screen.get_size()
        x0, y0, cell = self.grid_geometry(w, h)
        grid_size = cell * 3

        for i in range(1, 3):
            pygame.draw.line(screen, cfg.GRID_COLOR,
                             (x0 + i * cell, y0), (x0 + i * cell, y0 + grid_size), 3)
            pygame.draw.line(screen, cfg.GRID_COLOR,
                             (x0, y0 + i * cell), (x0 + grid_size, y0 + i * cell), 3)

        if self.is_player_turn():
            cr, cc = self.cursor
            rect = pygame.Rect(x0 + cc * cell, y0 + cr * cell, cell, cell)
            pygame.draw.rect(screen, cfg.SELECT_COLOR, rect, 5)

        for idx, val in enumerate(self.board):
            if val is None:
                continue
            r, c = divmod(idx, 3)
            color = cfg.SELECT_COLOR if idx == self.last_computer_cell else cfg.MARK_COLOR
            text = font_big.render(val.value, True, color)
            tx = x0 + c * cell + cell / 2 - text.get_width() / 2
            ty = y0 + r * cell + cell / 2 - text.get_height() / 2
            screen.blit(text, (tx, ty))

        if self.win_line is not None:
            win_color = cfg.PLAYER_WIN_COLOR if self.winner == self.player_mark else cfg.AI_WIN_COLOR

            def cell_center(i):
                rr, cc = divmod(i, 3)
                return (x0 + cc * cell + cell / 2, y0 + rr * cell + cell / 2)

            p1 = cell_center(self.win_line[0])
            p2 = cell_center(self.win_line[2])

            pygame.draw.line(screen, win_color, p1, p2, 12)
            pygame.draw.circle(screen, win_color, (int(p1[0]), int(p1[1])), 10)
            pygame.draw.circle(screen, win_color, (int(p2[0]), int(p2[1])), 10)

        st = font_small.render(status_text, True, cfg.TEXT_COLOR)
        screen.blit(st, (10, 10))

        info = f"Difficulty: {self.difficulty.label}   You: {self.player_mark.value}"
        diff = font_small.render(info, True, cfg.TEXT_COLOR)
        screen.blit(diff, (10, 36))
