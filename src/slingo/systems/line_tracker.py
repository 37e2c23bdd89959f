from typing import Iterable, List

from esper import World

from slingo.components.card_state import CardState
from slingo.constants import ALMOST_COMPLETE_MAX_UNMARKED, GRID_COLS, GRID_ROWS
from slingo.events.bus import EVENT_CELLS_MARKED, EVENT_LINES_COMPLETED, EventBus
from slingo.systems.board_ops import (
    LINE_IDS,
    LineCandidate,
    Position,
    find_almost_complete_lines,
    is_line_complete,
)
from slingo.utils.singletons import get_card_state


class LineTrackerSystem:
    """Owns marked cells and completed lines for the active card.

    Marking is monotonic and completion detection is idempotent: a line that has
    been reported once is never reported (or scored) again within a game.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def _state(self) -> CardState:
        return get_card_state(self.world)

    @property
    def marked(self) -> set[Position]:
        return self._state().marked

    @property
    def completed_lines(self) -> set[str]:
        return self._state().completed_lines

    def apply_marks(self, cells: Iterable[Position], source: str = "spin") -> List[Position]:
        """Mark cells in the given order; returns only the cells that were newly marked."""
        state = self._state()
        added: List[Position] = []
        for row, col in cells:
            if not (0 <= row < GRID_ROWS and 0 <= col < GRID_COLS):
                continue
            cell = (row, col)
            if cell in state.marked:
                continue
            state.marked.add(cell)
            added.append(cell)
        if added:
            self.event_bus.emit(EVENT_CELLS_MARKED, cells=list(added), source=source)
        return added

    def check_new_completions(self) -> List[str]:
        state = self._state()
        new_lines = [
            line_id
            for line_id in LINE_IDS
            if line_id not in state.completed_lines and is_line_complete(line_id, state.marked)
        ]
        if not new_lines:
            return []
        state.completed_lines.update(new_lines)
        self.event_bus.emit(
            EVENT_LINES_COMPLETED,
            line_ids=list(new_lines),
            total=len(state.completed_lines),
        )
        return new_lines

    def find_almost_complete(self, max_unmarked: int = ALMOST_COMPLETE_MAX_UNMARKED) -> List[LineCandidate]:
        state = self._state()
        return find_almost_complete_lines(state.marked, state.completed_lines, max_unmarked)

    def is_full_house(self) -> bool:
        return len(self._state().marked) >= GRID_ROWS * GRID_COLS
