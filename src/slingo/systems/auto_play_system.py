from __future__ import annotations

from typing import Callable, Optional

from esper import World

from slingo.components.auto_play import AutoPlayState
from slingo.constants import AUTO_SPIN_DELAY, GRID_COLS, GRID_ROWS
from slingo.events.bus import (
    EventBus,
    EVENT_AUTO_PLAY_TOGGLE,
    EVENT_CELL_CLICK,
    EVENT_GAME_OVER,
    EVENT_SPIN_REQUEST,
    EVENT_STATUS_MESSAGE,
    EVENT_TICK,
)
from slingo.systems.board_ops import LINES, Position
from slingo.utils.singletons import get_card_state, get_or_create, get_pending, get_session

SelectionResolver = Callable[[World], Optional[Position]]


def greedy_selection(world: World) -> Position | None:
    """Pick the pending-eligible cell that leaves some line closest to completion."""
    pending = get_pending(world)
    state = get_card_state(world)
    if pending.wild_columns:
        col = pending.wild_columns[0]
        choices = [(row, col) for row in range(GRID_ROWS) if (row, col) not in state.marked]
    elif pending.super_wild:
        choices = [
            (row, col)
            for row in range(GRID_ROWS)
            for col in range(GRID_COLS)
            if (row, col) not in state.marked
        ]
    else:
        return None
    if not choices:
        return None

    def gaps_after(cell: Position) -> int:
        best = GRID_ROWS + 1
        for line_id, cells in LINES.items():
            if line_id in state.completed_lines or cell not in cells:
                continue
            remaining = sum(1 for other in cells if other not in state.marked and other != cell)
            best = min(best, remaining)
        return best

    return min(choices, key=gaps_after)


class AutoPlaySystem:
    """Spins automatically on a fixed delay while active.

    When a wild pick is pending the loop pauses; if a resolver is configured it is
    asked for a cell, otherwise play resumes once the player selects. The loop
    switches itself off when the game ends.
    """
    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        delay: float = AUTO_SPIN_DELAY,
        resolver: SelectionResolver | None = None,
    ):
        self.world = world
        self.event_bus = event_bus
        self.delay = delay
        self.resolver = resolver
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_AUTO_PLAY_TOGGLE, self.on_toggle)
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)

    def _state(self) -> AutoPlayState:
        return get_or_create(self.world, AutoPlayState)

    @property
    def active(self) -> bool:
        return self._state().active

    def on_toggle(self, sender, **kwargs):
        state = self._state()
        requested = kwargs.get("active")
        target = (not state.active) if requested is None else bool(requested)
        if target == state.active:
            return
        if target and not self._can_spin_later():
            return
        state.active = target
        state.elapsed = 0.0
        if target:
            self.event_bus.emit(EVENT_STATUS_MESSAGE, message="Auto spin started! The game will play automatically.")
            # First spin goes out immediately.
            self._step()

    def on_game_over(self, sender, **kwargs):
        self._stop()

    def on_tick(self, sender, **kwargs):
        state = self._state()
        if not state.active:
            return
        state.elapsed += float(kwargs.get("dt", 0.0))
        if state.elapsed < self.delay:
            return
        state.elapsed = 0.0
        self._step()

    def _step(self) -> None:
        if not self._can_spin_later():
            self._stop()
            return
        pending = get_pending(self.world)
        if pending.has_pending():
            if self.resolver is None:
                return
            cell = self.resolver(self.world)
            if cell is not None:
                self.event_bus.emit(EVENT_CELL_CLICK, row=cell[0], col=cell[1])
            return
        self.event_bus.emit(EVENT_SPIN_REQUEST, source="auto")

    def _can_spin_later(self) -> bool:
        session = get_session(self.world)
        if not session.game_active:
            return False
        # Spins may be exhausted while the last wild picks are still outstanding.
        return session.spins_remaining > 0 or get_pending(self.world).has_pending()

    def _stop(self) -> None:
        state = self._state()
        state.active = False
        state.elapsed = 0.0
