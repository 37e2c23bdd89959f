from dataclasses import dataclass, field
from typing import Set, Tuple

Cell = Tuple[int, int]


@dataclass(slots=True)
class CardState:
    """Marked cells and completed lines for the current game.

    Both sets only grow during a game; a reset replaces the whole component.
    """
    marked: Set[Cell] = field(default_factory=set)
    completed_lines: Set[str] = field(default_factory=set)

    def is_marked(self, row: int, col: int) -> bool:
        return (row, col) in self.marked
