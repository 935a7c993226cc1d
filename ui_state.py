from dataclasses import dataclass
from enum import Enum
from typing import Optional

import config as cfg
from ttt_ai import ComputerMove, Difficulty
from ttt_board import Mark

DIFFICULTIES = list(Difficulty)
SYMBOLS = [Mark.X, Mark.O]


class Phase(Enum):
    DIFFICULTY = "difficulty"
    SYMBOL = "symbol"
    PLAYING = "playing"


@dataclass
class UIState:
    phase: Phase = Phase.DIFFICULTY

    # Setup screens
    difficulty: Difficulty = Difficulty.MEDIUM
    symbol: Mark = Mark.X
    symbol_chosen_at: Optional[float] = None

    # Symbol given on the command line; the symbol screen is skipped
    preset_symbol: Optional[Mark] = None

    # Computer turn: a move is picked up front and revealed once due
    computer_due_at: Optional[float] = None
    pending_move: Optional[ComputerMove] = None

    @classmethod
    def from_options(cls, difficulty: Optional[str] = None, symbol: Optional[str] = None) -> "UIState":
        """
        Build the start-up state from command-line presets.
        A preset difficulty skips the difficulty screen, a preset symbol skips
        the symbol screen every time it would be shown.
        """
        state = cls(difficulty=Difficulty.parse(difficulty or cfg.DEFAULT_DIFFICULTY))
        if symbol:
            state.preset_symbol = Mark(symbol)
            state.symbol = state.preset_symbol
        if difficulty:
            state.to_symbol()
        return state

    def to_difficulty(self):
        self.phase = Phase.DIFFICULTY
        self.symbol_chosen_at = None
        self.cancel_computer()

    def to_symbol(self):
        self.phase = Phase.SYMBOL
        self.symbol_chosen_at = None
        self.cancel_computer()

    def start_playing(self):
        self.phase = Phase.PLAYING
        self.symbol_chosen_at = None

    #  setup helpers
    def cycle_difficulty(self, step: int):
        i = DIFFICULTIES.index(self.difficulty)
        self.difficulty = DIFFICULTIES[(i + step) % len(DIFFICULTIES)]

    def cycle_symbol(self, step: int):
        if self.symbol_chosen_at is not None:
            return
        i = SYMBOLS.index(self.symbol)
        self.symbol = SYMBOLS[(i + step) % len(SYMBOLS)]

    def choose_symbol(self, now: float, symbol: Optional[Mark] = None):
        # First choice sticks until the start delay runs out
        if self.symbol_chosen_at is not None:
            return
        if symbol is not None:
            self.symbol = symbol
        self.symbol_chosen_at = now

    def symbol_ready(self, now: float) -> bool:
        """
        Returns True once the chosen symbol has been shown long enough to start.
        """
        if self.preset_symbol is not None:
            self.symbol = self.preset_symbol
            return True
        if self.symbol_chosen_at is None:
            return False
        return (now - self.symbol_chosen_at) >= cfg.SYMBOL_START_DELAY

    #  computer turn helpers
    def computer_pending(self) -> bool:
        return self.pending_move is not None

    def schedule_computer(self, now: float, move: ComputerMove):
        delay = cfg.SMART_MOVE_DELAY if move.smart else cfg.RANDOM_MOVE_DELAY
        self.pending_move = move
        self.computer_due_at = now + cfg.COMPUTER_TURN_DELAY + delay

    def take_due_move(self, now: float) -> Optional[ComputerMove]:
        """
        Returns the scheduled move once its delay has passed, else None.
        """
        if self.pending_move is None or now < self.computer_due_at:
            return None
        move = self.pending_move
        self.cancel_computer()
        return move

    def cancel_computer(self):
        self.pending_move = None
        self.computer_due_at = None
