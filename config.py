# Frame rate
FPS = 30

# Window
WIN_W = 720
WIN_H = 720
TITLE = "Tic-Tac-Toe vs Computer (click/arrows+Enter=PLACE, R=Restart, D=Difficulty, Q=Quit)"

# Colors
BG_COLOR = (15, 15, 20)
GRID_COLOR = (200, 200, 200)
TEXT_COLOR = (220, 220, 220)
MARK_COLOR = (240, 240, 240)
SELECT_COLOR = (80, 140, 255)
PLAYER_WIN_COLOR = (79, 195, 247)
AI_WIN_COLOR = (255, 107, 107)

# Fonts
FONT_BIG = 90
FONT_MARK = 140
FONT_SMALL = 26

# Setup / turn delays (seconds)
SYMBOL_START_DELAY = 0.5
COMPUTER_TURN_DELAY = 0.5

# "Thinking" pause before the computer's move is shown
SMART_MOVE_DELAY = 0.8
RANDOM_MOVE_DELAY = 0.4

# AI
MEDIUM_SMART_PROBABILITY = 0.6
DEFAULT_DIFFICULTY = "medium"

# Logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
