from slingo.constants import (
    GRID_COLS, GRID_ROWS, BOTTOM_MARGIN, BOARD_MAX_WIDTH_PCT, BOARD_MAX_HEIGHT_PCT,
    SPIN_BUTTON_GAP, SPIN_BUTTON_HEIGHT, SPIN_BUTTON_WIDTH, SPIN_ROW_GAP,
)

def compute_board_geometry(window_width: int, window_height: int):
    """Return (tile_size, start_x, start_y) for the board's bottom-left corner.

    Shared by RenderSystem and InputSystem so clicks map to the cells that are drawn.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN) * BOARD_MAX_HEIGHT_PCT
    tile_by_w = max_board_w / GRID_COLS
    # One extra row of height for the spin row drawn above the board.
    tile_by_h = max_board_h / (GRID_ROWS + 1)
    tile_size = int(min(tile_by_w, tile_by_h))
    if tile_size < 20:
        tile_size = 20
    total_width = GRID_COLS * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_origin(row: int, col: int, window_width: int, window_height: int):
    """Bottom-left corner of a cell; row 0 is the top row of the card."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height)
    x = start_x + col * tile_size
    y = start_y + (GRID_ROWS - 1 - row) * tile_size
    return x, y


def cell_at_point(x: float, y: float, window_width: int, window_height: int):
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height)
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    if not (0 <= col < GRID_COLS and 0 <= row_from_bottom < GRID_ROWS):
        return None
    return GRID_ROWS - 1 - row_from_bottom, col


def spin_row_origin(col: int, window_width: int, window_height: int):
    """Bottom-left corner of a spin reel slot, drawn above its board column."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height)
    return start_x + col * tile_size, start_y + GRID_ROWS * tile_size + SPIN_ROW_GAP


def spin_button_rect(window_width: int, window_height: int):
    """(left, bottom, width, height) of the spin button centred under the board."""
    left = (window_width - SPIN_BUTTON_WIDTH) / 2
    return left, SPIN_BUTTON_GAP, SPIN_BUTTON_WIDTH, SPIN_BUTTON_HEIGHT


def point_in_rect(x: float, y: float, rect) -> bool:
    left, bottom, width, height = rect
    return left <= x <= left + width and bottom <= y <= bottom + height
