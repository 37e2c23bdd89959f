from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored in a variable alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_CELL_CLICK = "cell_click"                    # payload: row, col
EVENT_SPIN_REQUEST = "spin_request"                # payload: source=str
EVENT_NEW_GAME_REQUEST = "new_game_request"        # payload: None
EVENT_AUTO_PLAY_TOGGLE = "auto_play_toggle"        # payload: active=bool|None


# ============================================================================
# GAME LIFECYCLE
# ============================================================================
EVENT_GAME_STARTED = "game_started"                        # payload: game_counter=int, target=int, board=list[list[int]]
EVENT_SESSION_PHASE_CHANGED = "session_phase_changed"      # payload: previous_phase=SessionPhase|None, new_phase=SessionPhase
EVENT_GAME_OVER = "game_over"                              # payload: score=int, slingo_count=int, target=int, full_house=bool
EVENT_STATUS_MESSAGE = "status_message"                    # payload: message=str


# ============================================================================
# SPINS & BOARD
# ============================================================================
EVENT_OUTCOMES_REVEALED = "outcomes_revealed"      # payload: outcomes=list[SpinOutcome], spins_remaining=int
EVENT_CELLS_MARKED = "cells_marked"                # payload: cells=list[(r,c)], source=str
EVENT_LINES_COMPLETED = "lines_completed"          # payload: line_ids=list[str], total=int
EVENT_PENDING_SELECTION = "pending_selection"      # payload: wild_columns=list[int], super_wild=bool
EVENT_SELECTION_RESOLVED = "selection_resolved"    # payload: row, col, kind=str
EVENT_TARGET_FORCED = "target_forced"              # payload: line_ids=list[str], cells=list[(r,c)]
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_FULL_HOUSE = "full_house"                    # payload: score=int


# ============================================================================
# BONUS COLLECTOR
# ============================================================================
EVENT_BONUS_TRIGGERED = "bonus_triggered"              # payload: column=int
EVENT_BONUS_COLLECTED = "bonus_collected"              # payload: slot=int, filled=int, capacity=int
EVENT_BONUS_COLLECTOR_FULL = "bonus_collector_full"    # payload: capacity=int
