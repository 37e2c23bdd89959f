from dataclasses import dataclass
from typing import Sequence, Tuple

from slingo.constants import COLUMN_SPAN, GRID_COLS, GRID_ROWS


def column_range(col: int, span: int = COLUMN_SPAN) -> Tuple[int, int]:
    """Inclusive (low, high) number range for a board column."""
    return span * col + 1, span * (col + 1)


@dataclass(frozen=True, slots=True)
class Board:
    """Immutable 5x5 number card for one game.

    numbers[row][col] holds the value printed on the cell. Each column only holds
    distinct values from its own 15-wide range; there is no cross-column constraint.
    """
    numbers: Tuple[Tuple[int, ...], ...]

    def __post_init__(self):
        if len(self.numbers) != GRID_ROWS or any(len(row) != GRID_COLS for row in self.numbers):
            raise ValueError(f"Board must be {GRID_ROWS}x{GRID_COLS}")
        for col in range(GRID_COLS):
            low, high = column_range(col)
            values = self.column_values(col)
            if len(set(values)) != len(values):
                raise ValueError(f"Column {col} contains duplicate numbers: {values}")
            out_of_range = [v for v in values if not low <= v <= high]
            if out_of_range:
                raise ValueError(f"Column {col} values {out_of_range} outside {low}-{high}")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        return cls(numbers=tuple(tuple(int(v) for v in row) for row in rows))

    @property
    def rows(self) -> int:
        return len(self.numbers)

    @property
    def cols(self) -> int:
        return len(self.numbers[0]) if self.numbers else 0

    def number_at(self, row: int, col: int) -> int:
        return self.numbers[row][col]

    def column_values(self, col: int) -> list[int]:
        return [row[col] for row in self.numbers]

    def snapshot(self) -> list[list[int]]:
        """Detached copy for presentation layers."""
        return [list(row) for row in self.numbers]
