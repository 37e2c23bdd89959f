from esper import World

from slingo.components.bonus_collector import BonusCollector
from slingo.components.board import Board
from slingo.components.spin_outcome import OutcomeKind
from slingo.constants import GRID_COLS, GRID_ROWS
from slingo.events.bus import EventBus, EVENT_TICK, EVENT_LINES_COMPLETED, EVENT_GAME_STARTED
from slingo.systems.board_ops import LINES
from slingo.systems.prize_table import achieved_prizes
from slingo.ui.layout import (
    cell_origin,
    compute_board_geometry,
    spin_button_rect,
    spin_row_origin,
)
from slingo.utils.singletons import get_card_state, get_or_create, get_pending, get_session

PADDING = 4
# Seconds a freshly completed line stays highlighted.
LINE_FLASH_SECONDS = 1.5

OUTCOME_COLORS = {
    OutcomeKind.NUMBER: (70, 70, 90),
    OutcomeKind.WILD: (40, 160, 80),
    OutcomeKind.SUPER_WILD: (200, 160, 20),
    OutcomeKind.BLOCKER: (170, 40, 40),
    OutcomeKind.BONUS: (60, 110, 200),
}


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_LINES_COMPLETED, self.on_lines_completed)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_game_started)
        self._flash: dict[str, float] = {}
        # (row, col) -> (x, y) bottom-left of each drawn cell; rebuilt every frame.
        self._last_draw_coords: dict[tuple[int, int], tuple[float, float]] = {}

    def on_tick(self, sender, **kwargs):
        dt = float(kwargs.get('dt', 1/60))
        for line_id in list(self._flash):
            self._flash[line_id] -= dt
            if self._flash[line_id] <= 0:
                del self._flash[line_id]

    def on_lines_completed(self, sender, **kwargs):
        for line_id in kwargs.get('line_ids', []):
            self._flash[line_id] = LINE_FLASH_SECONDS

    def on_game_started(self, sender, **kwargs):
        self._flash.clear()

    def flashing_cells(self) -> set[tuple[int, int]]:
        cells: set[tuple[int, int]] = set()
        for line_id in self._flash:
            cells.update(LINES[line_id])
        return cells

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True

        width, height = self.window.width, self.window.height
        tile_size, _, _ = compute_board_geometry(width, height)
        self._last_draw_coords = {
            (row, col): cell_origin(row, col, width, height)
            for row in range(GRID_ROWS)
            for col in range(GRID_COLS)
        }
        boards = list(self.world.get_component(Board))
        if headless or not boards:
            return
        board = boards[0][1]
        state = get_card_state(self.world)
        pending = get_pending(self.world)
        session = get_session(self.world)
        flashing = self.flashing_cells()

        for (row, col), (x, y) in self._last_draw_coords.items():
            if (row, col) in state.marked:
                fill = arcade.color.GOLD if (row, col) in flashing else arcade.color.DARK_SPRING_GREEN
            elif col in pending.wild_columns or pending.super_wild:
                fill = arcade.color.DARK_SLATE_BLUE
            else:
                fill = arcade.color.DARK_SLATE_GRAY
            arcade.draw_lbwh_rectangle_filled(
                x + PADDING, y + PADDING, tile_size - 2 * PADDING, tile_size - 2 * PADDING, fill
            )
            arcade.draw_text(
                str(board.number_at(row, col)),
                x + tile_size / 2,
                y + tile_size / 2,
                arcade.color.WHITE,
                font_size=max(10, int(tile_size * 0.3)),
                anchor_x="center",
                anchor_y="center",
            )

        self._draw_spin_row(arcade, session.last_outcomes, tile_size, width, height)
        self._draw_spin_button(arcade, session, width, height)
        self._draw_hud(arcade, session, width, height)
        self._draw_collector(arcade, width, height)

    def _draw_spin_row(self, arcade, outcomes, tile_size, width, height):
        for col in range(GRID_COLS):
            x, y = spin_row_origin(col, width, height)
            outcome = outcomes[col] if col < len(outcomes) else None
            fill = OUTCOME_COLORS[outcome.kind] if outcome is not None else (40, 40, 40)
            arcade.draw_lbwh_rectangle_filled(
                x + PADDING, y + PADDING, tile_size - 2 * PADDING, tile_size - 2 * PADDING, fill
            )
            if outcome is None:
                continue
            arcade.draw_text(
                outcome.label(),
                x + tile_size / 2,
                y + tile_size / 2,
                arcade.color.WHITE,
                font_size=max(8, int(tile_size * 0.18)),
                anchor_x="center",
                anchor_y="center",
            )

    def _draw_spin_button(self, arcade, session, width, height):
        left, bottom, w, h = spin_button_rect(width, height)
        enabled = session.game_active and session.spins_remaining > 0 and not get_pending(self.world).has_pending()
        fill = arcade.color.DARK_GREEN if enabled else arcade.color.GRAY
        arcade.draw_lbwh_rectangle_filled(left, bottom, w, h, fill)
        arcade.draw_text(
            f"SPIN ({session.spins_remaining})",
            left + w / 2,
            bottom + h / 2,
            arcade.color.WHITE,
            font_size=14,
            anchor_x="center",
            anchor_y="center",
        )

    def _draw_hud(self, arcade, session, width, height):
        lines = [
            f"Game {session.game_counter}",
            f"Score: {session.score}",
            f"Slingos: {session.slingo_count} / {session.target_slingo_count}",
            f"Spins left: {session.spins_remaining}",
        ]
        prizes = achieved_prizes(session.slingo_count, session.full_house)
        if prizes:
            lines.append(f"Prize: {prizes[-1]}")
        for index, text in enumerate(lines):
            arcade.draw_text(text, 16, height - 28 - index * 22, arcade.color.WHITE, font_size=14)
        if session.status_message:
            arcade.draw_text(
                session.status_message,
                width / 2,
                height - 28,
                arcade.color.LIGHT_GRAY,
                font_size=14,
                anchor_x="center",
            )

    def _draw_collector(self, arcade, width, height):
        collector = get_or_create(self.world, BonusCollector)
        size = 24
        right = width - 16
        top = height - 16
        for slot in range(collector.capacity):
            left = right - (collector.capacity - slot) * (size + 6)
            fill = arcade.color.ROYAL_BLUE if slot < collector.filled else arcade.color.DARK_GRAY
            arcade.draw_lrbt_rectangle_filled(left, left + size, top - size, top, fill)
