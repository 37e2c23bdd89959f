from __future__ import annotations

import random
from dataclasses import dataclass
from typing import AbstractSet, Dict, List, Tuple

from slingo.components.board import Board, column_range
from slingo.constants import COLUMN_SPAN, GRID_COLS, GRID_ROWS

Position = Tuple[int, int]


def _build_lines() -> Dict[str, Tuple[Position, ...]]:
    # Insertion order is the discovery order: rows, columns, main diagonal, anti-diagonal.
    lines: Dict[str, Tuple[Position, ...]] = {}
    for row in range(GRID_ROWS):
        lines[f"row-{row}"] = tuple((row, col) for col in range(GRID_COLS))
    for col in range(GRID_COLS):
        lines[f"col-{col}"] = tuple((row, col) for row in range(GRID_ROWS))
    lines["diag-main"] = tuple((i, i) for i in range(GRID_ROWS))
    lines["diag-anti"] = tuple((i, GRID_COLS - 1 - i) for i in range(GRID_ROWS))
    return lines


LINES: Dict[str, Tuple[Position, ...]] = _build_lines()
LINE_IDS: Tuple[str, ...] = tuple(LINES)


@dataclass(frozen=True, slots=True)
class LineCandidate:
    line_id: str
    unmarked_cells: Tuple[Position, ...]

    @property
    def unmarked_count(self) -> int:
        return len(self.unmarked_cells)


def generate_board(rng: random.Random | None = None, *, span: int = COLUMN_SPAN) -> Board:
    """Draw five distinct numbers per column from the column's range.

    Rejection sampling against a per-column used set; columns are independent.
    """
    if span < GRID_ROWS:
        raise ValueError(f"Column span {span} cannot yield {GRID_ROWS} distinct numbers")
    rng = rng or random.Random()
    columns: List[List[int]] = []
    for col in range(GRID_COLS):
        low, high = column_range(col, span)
        used: set[int] = set()
        values: List[int] = []
        while len(values) < GRID_ROWS:
            number = rng.randint(low, high)
            if number in used:
                continue
            used.add(number)
            values.append(number)
        columns.append(values)
    rows = [[columns[col][row] for col in range(GRID_COLS)] for row in range(GRID_ROWS)]
    return Board.from_rows(rows)


def line_cells(line_id: str) -> Tuple[Position, ...]:
    try:
        return LINES[line_id]
    except KeyError as exc:
        raise ValueError(f"Unknown line '{line_id}'") from exc


def is_line_complete(line_id: str, marked: AbstractSet[Position]) -> bool:
    return all(cell in marked for cell in LINES[line_id])


def unmarked_in_column(board: Board, marked: AbstractSet[Position], col: int) -> List[Position]:
    return [(row, col) for row in range(board.rows) if (row, col) not in marked]


def find_almost_complete_lines(
    marked: AbstractSet[Position],
    completed: AbstractSet[str],
    max_unmarked: int,
) -> List[LineCandidate]:
    """Open lines with at most max_unmarked gaps, fewest gaps first.

    sorted() is stable, so ties keep the LINE_IDS discovery order.
    """
    candidates: List[LineCandidate] = []
    for line_id, cells in LINES.items():
        if line_id in completed:
            continue
        unmarked = tuple(cell for cell in cells if cell not in marked)
        if len(unmarked) <= max_unmarked:
            candidates.append(LineCandidate(line_id=line_id, unmarked_cells=unmarked))
    return sorted(candidates, key=lambda candidate: candidate.unmarked_count)
