from __future__ import annotations

import itertools
import logging
import random
from typing import Callable, List

from esper import World

from slingo.components.board import Board
from slingo.components.card_state import CardState
from slingo.components.game_rules import GameRules
from slingo.components.game_session import GameSession, SessionPhase
from slingo.components.pending_selection import PendingSelection
from slingo.components.session_flags import SessionFlags
from slingo.constants import GRID_COLS, GRID_ROWS
from slingo.events.bus import (
    EventBus,
    EVENT_BONUS_TRIGGERED,
    EVENT_CELL_CLICK,
    EVENT_FULL_HOUSE,
    EVENT_GAME_OVER,
    EVENT_GAME_STARTED,
    EVENT_NEW_GAME_REQUEST,
    EVENT_OUTCOMES_REVEALED,
    EVENT_PENDING_SELECTION,
    EVENT_SCORE_CHANGED,
    EVENT_SELECTION_RESOLVED,
    EVENT_SPIN_REQUEST,
    EVENT_STATUS_MESSAGE,
    EVENT_TARGET_FORCED,
)
from slingo.systems.board_ops import Position, generate_board, unmarked_in_column
from slingo.systems.line_tracker import LineTrackerSystem
from slingo.systems.match_resolution import SpinResolution, resolve_outcomes
from slingo.systems.outcome_generator import OutcomeGenerator
from slingo.systems.target_planner import compute_target
from slingo.utils.session_phase import set_session_phase
from slingo.utils.singletons import get_board, get_card_state, get_flags, get_pending, get_session

logger = logging.getLogger(__name__)


class GameSessionSystem:
    """Runs one Slingo game at a time.

    Flow per spin:
      - Generate five outcomes biased toward the game's target line count.
      - Resolve them into marks, pending wild picks and bonus triggers.
      - Apply marks, spend the spin, rescore and check terminal conditions.
    Pending wild picks gate further spins. When the last spin has been played and
    nothing is pending, lines close to completion are forced until the target is
    reached, then the game ends.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rules: GameRules | None = None,
        rng: random.Random | None = None,
        counter_provider: Callable[[], int] | None = None,
        line_tracker: LineTrackerSystem | None = None,
        start_game: bool = True,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.rules: GameRules = rules or getattr(world, "rules", None) or GameRules()
        self._rng: random.Random = rng or getattr(world, "random", None) or random.Random()
        self.outcome_generator = OutcomeGenerator(self.rules, self._rng)
        self.line_tracker = line_tracker or LineTrackerSystem(world, event_bus)
        self._counter_provider = counter_provider or itertools.count(1).__next__
        self.event_bus.subscribe(EVENT_SPIN_REQUEST, self.on_spin_request)
        self.event_bus.subscribe(EVENT_CELL_CLICK, self.on_cell_click)
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self.on_new_game_request)
        if start_game:
            self.reset_game()

    # Lifecycle -----------------------------------------------------------

    def reset_game(self, board: Board | None = None) -> GameSession:
        """Start a fresh game; every per-game component is replaced together."""
        game_counter = int(self._counter_provider())
        target = compute_target(game_counter, self.rules.hit_rates)
        board = board or generate_board(self._rng)
        session = GameSession(
            game_counter=game_counter,
            target_slingo_count=target,
            spins_remaining=self.rules.spins_per_game,
        )
        entity = self._game_entity()
        for component in (board, CardState(), SessionFlags(), PendingSelection(), session):
            self._replace_singleton(entity, component)
        logger.info("Game %d started (target %d lines)", game_counter, target)
        self.event_bus.emit(
            EVENT_GAME_STARTED,
            game_counter=game_counter,
            target=target,
            board=board.snapshot(),
        )
        self._set_status("New game started! Spin to begin.")
        return session

    def _game_entity(self) -> int:
        for entity, _ in self.world.get_component(GameSession):
            return entity
        return self.world.create_entity()

    def _replace_singleton(self, entity: int, component) -> None:
        component_type = type(component)
        for other, _ in list(self.world.get_component(component_type)):
            if other != entity:
                self.world.remove_component(other, component_type)
        self.world.add_component(entity, component)

    # Event handlers ------------------------------------------------------

    def on_spin_request(self, sender, **kwargs) -> None:
        self.spin()

    def on_new_game_request(self, sender, **kwargs) -> None:
        self.reset_game()

    def on_cell_click(self, sender, **kwargs) -> None:
        row = kwargs.get("row")
        col = kwargs.get("col")
        if row is None or col is None:
            return
        pending = get_pending(self.world)
        # A column wild takes precedence over a grid-wide pick for cells in its column.
        if col in pending.wild_columns and not get_card_state(self.world).is_marked(row, col):
            self.resolve_pending_wild(col, (row, col))
        elif pending.super_wild:
            self.resolve_pending_super_wild((row, col))

    # Spins ---------------------------------------------------------------

    def spin(self) -> SpinResolution | None:
        """Play one spin; returns None when the spin is not allowed right now."""
        session = get_session(self.world)
        pending = get_pending(self.world)
        if not session.game_active or session.spins_remaining <= 0 or pending.has_pending():
            return None
        board = get_board(self.world)
        state = get_card_state(self.world)
        flags = get_flags(self.world)

        outcomes = self.outcome_generator.next_spin(
            board,
            state.marked,
            session.slingo_count,
            session.target_slingo_count,
            session.spins_remaining,
            flags,
        )
        session.last_outcomes = list(outcomes)
        resolution = resolve_outcomes(outcomes, board, state.marked)

        self.line_tracker.apply_marks(resolution.marks, source="spin")
        session.spins_remaining -= 1
        self.event_bus.emit(
            EVENT_OUTCOMES_REVEALED,
            outcomes=list(outcomes),
            spins_remaining=session.spins_remaining,
        )
        for col in resolution.bonus_columns:
            self.event_bus.emit(EVENT_BONUS_TRIGGERED, column=col)

        # A wild landing on a fully marked column has nothing left to pick.
        for col in resolution.pending_wild_columns:
            if col not in pending.wild_columns and unmarked_in_column(board, state.marked, col):
                pending.wild_columns.append(col)
        pending.super_wild = pending.super_wild or resolution.pending_super_wild

        new_lines = self._rescore(self.line_tracker.check_new_completions())
        if self._check_full_house():
            return resolution
        self._announce_spin(resolution, new_lines, pending)
        if pending.has_pending():
            self.event_bus.emit(
                EVENT_PENDING_SELECTION,
                wild_columns=list(pending.wild_columns),
                super_wild=pending.super_wild,
            )
        self._maybe_finish()
        return resolution

    def _announce_spin(self, resolution: SpinResolution, new_lines: List[str], pending: PendingSelection) -> None:
        if resolution.matched or pending.has_pending():
            if new_lines:
                count = len(new_lines)
                plural = "S" if count > 1 else ""
                self._set_status(f"SLINGO{plural}! You completed {count} line{'s' if count > 1 else ''}!")
            elif pending.super_wild:
                self._set_status("Super Wild appeared! Select any unmarked cell on the grid.")
            elif pending.wild_columns:
                self._set_status("Wild appeared! Select an unmarked cell in the highlighted column.")
            else:
                self._set_status("Great! You found matches!")
        elif resolution.blocker_columns:
            self._set_status("Blocker appeared! No matches in that column this spin.")
        else:
            self._set_status("No matches this time. Keep spinning!")

    # Player selections ---------------------------------------------------

    def resolve_pending_wild(self, col: int, cell: Position) -> bool:
        session = get_session(self.world)
        pending = get_pending(self.world)
        row, cell_col = cell
        if not session.game_active or col not in pending.wild_columns or cell_col != col:
            return False
        if not self._selectable(row, cell_col):
            return False
        pending.wild_columns.remove(col)
        self._apply_selection((row, cell_col), "wild")
        return True

    def resolve_pending_super_wild(self, cell: Position) -> bool:
        session = get_session(self.world)
        pending = get_pending(self.world)
        row, col = cell
        if not session.game_active or not pending.super_wild:
            return False
        if not self._selectable(row, col):
            return False
        pending.super_wild = False
        self._apply_selection((row, col), "super_wild")
        return True

    def _selectable(self, row: int, col: int) -> bool:
        if not (0 <= row < GRID_ROWS and 0 <= col < GRID_COLS):
            return False
        return not get_card_state(self.world).is_marked(row, col)

    def _apply_selection(self, cell: Position, kind: str) -> None:
        self.line_tracker.apply_marks([cell], source=kind)
        self._drop_filled_wild_columns()
        self.event_bus.emit(EVENT_SELECTION_RESOLVED, row=cell[0], col=cell[1], kind=kind)
        new_lines = self._rescore(self.line_tracker.check_new_completions())
        if self._check_full_house():
            return
        if new_lines:
            count = len(new_lines)
            self._set_status(f"SLINGO! You completed {count} line{'s' if count > 1 else ''}!")
        elif kind == "super_wild":
            self._set_status("Excellent choice! You marked a cell with the Super Wild.")
        else:
            self._set_status("Great choice! You marked a cell with the Wild.")
        self._maybe_finish()

    def _drop_filled_wild_columns(self) -> None:
        """Forget pending wilds whose column has no unmarked cell left."""
        pending = get_pending(self.world)
        board = get_board(self.world)
        marked = get_card_state(self.world).marked
        pending.wild_columns[:] = [
            col for col in pending.wild_columns if unmarked_in_column(board, marked, col)
        ]

    # Scoring & end of game -----------------------------------------------

    def _rescore(self, new_lines: List[str]) -> List[str]:
        """Add line points for new_lines plus points for every marked cell."""
        session = get_session(self.world)
        state = get_card_state(self.world)
        session.slingo_count = len(state.completed_lines)
        delta = self.rules.line_points * len(new_lines) + self.rules.marked_cell_points * len(state.marked)
        session.score += delta
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=session.score, delta=delta)
        return new_lines

    def _check_full_house(self) -> bool:
        session = get_session(self.world)
        if session.full_house or not self.line_tracker.is_full_house():
            return False
        session.full_house = True
        session.score += self.rules.full_house_bonus
        get_pending(self.world).clear()
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=session.score, delta=self.rules.full_house_bonus)
        self.event_bus.emit(EVENT_FULL_HOUSE, score=session.score)
        self._set_status("FULL HOUSE! Congratulations, you won the game!")
        self._end_game()
        return True

    def _maybe_finish(self) -> None:
        session = get_session(self.world)
        if not session.game_active or session.spins_remaining > 0:
            return
        if get_pending(self.world).has_pending():
            return
        if not session.target_met:
            self.ensure_target_met()
        if session.game_active:
            self._set_status("Game over! Thanks for playing Slingo!")
            self._end_game()

    def ensure_target_met(self) -> List[str]:
        """Force near-complete lines until the target count is reached.

        Returns the line ids completed by the pass. Does nothing while spins remain,
        while selections are pending or once the target is already met.
        """
        session = get_session(self.world)
        if not session.game_active or session.spins_remaining > 0 or session.target_met:
            return []
        if get_pending(self.world).has_pending():
            return []
        set_session_phase(self.world, self.event_bus, SessionPhase.FORCED_COMPLETION)
        state = get_card_state(self.world)
        forced_lines: List[str] = []
        forced_cells: List[Position] = []
        while session.slingo_count < session.target_slingo_count:
            candidates = self.line_tracker.find_almost_complete(self.rules.almost_complete_max_unmarked)
            if not candidates:
                break
            candidate = candidates[0]
            forced_cells.extend(self.line_tracker.apply_marks(candidate.unmarked_cells, source="forced"))
            forced_lines.extend(self.line_tracker.check_new_completions())
            session.slingo_count = len(state.completed_lines)
        logger.debug(
            "Forced lines %s for game %d (target %d, reached %d)",
            forced_lines,
            session.game_counter,
            session.target_slingo_count,
            session.slingo_count,
        )
        if not forced_cells:
            return forced_lines
        self.event_bus.emit(EVENT_TARGET_FORCED, line_ids=list(forced_lines), cells=list(forced_cells))
        self._rescore(forced_lines)
        self._check_full_house()
        return forced_lines

    def _end_game(self) -> None:
        session = get_session(self.world)
        if session.phase == SessionPhase.TERMINAL:
            return
        set_session_phase(self.world, self.event_bus, SessionPhase.TERMINAL)
        logger.info(
            "Game %d over: score=%d lines=%d/%d full_house=%s",
            session.game_counter,
            session.score,
            session.slingo_count,
            session.target_slingo_count,
            session.full_house,
        )
        self.event_bus.emit(
            EVENT_GAME_OVER,
            score=session.score,
            slingo_count=session.slingo_count,
            target=session.target_slingo_count,
            full_house=session.full_house,
        )

    def _set_status(self, message: str) -> None:
        get_session(self.world).status_message = message
        self.event_bus.emit(EVENT_STATUS_MESSAGE, message=message)
