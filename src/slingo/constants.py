GRID_ROWS = 5
GRID_COLS = 5
# Each column c draws from [COLUMN_SPAN*c + 1, COLUMN_SPAN*(c+1)].
COLUMN_SPAN = 15
SPINS_PER_GAME = 8

# Outcome generation (per spin probabilities).
BLOCKER_CHANCE = 0.15
SUPER_WILD_CHANCE = 0.20
BONUS_CHANCE = 0.20
WILD_CHANCE = 0.33
MAX_WILDS_PER_GAME = 2
# Upper bound for the chance a column is steered onto an unmarked board value.
BIAS_CAP = 0.8

# Target planning: completed-line count -> game counter divisor.
# 11 intentionally has no entry.
HIT_RATES = {
    2: 2,
    3: 3,
    4: 4,
    5: 5,
    6: 6,
    7: 7,
    8: 8,
    9: 9,
    10: 10,
    12: 12,
}
MIN_TARGET = 1

# Scoring
LINE_POINTS = 100
MARKED_CELL_POINTS = 10
FULL_HOUSE_BONUS = 2500

# End-of-game forcing considers lines with at most this many unmarked cells.
ALMOST_COMPLETE_MAX_UNMARKED = 2

BONUS_COLLECTOR_SLOTS = 3
AUTO_SPIN_DELAY = 1.0  # seconds between automatic spins

# Layout
BOTTOM_MARGIN = 60
# Board footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.6
BOARD_MAX_HEIGHT_PCT = 0.6
# Gap between the board top edge and the spin row above it.
SPIN_ROW_GAP = 16
# Spin button below the board.
SPIN_BUTTON_WIDTH = 160
SPIN_BUTTON_HEIGHT = 40
SPIN_BUTTON_GAP = 10
