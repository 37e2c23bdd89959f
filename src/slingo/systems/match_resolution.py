from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, List, Sequence

from slingo.components.board import Board
from slingo.components.spin_outcome import OutcomeKind, SpinOutcome
from slingo.systems.board_ops import Position


@dataclass(slots=True)
class SpinResolution:
    """What a spin does to the card, before anything is applied.

    marks are ordered by column so presentation can reveal them left to right.
    """
    marks: List[Position] = field(default_factory=list)
    pending_wild_columns: List[int] = field(default_factory=list)
    pending_super_wild: bool = False
    bonus_columns: List[int] = field(default_factory=list)
    blocker_columns: List[int] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return bool(self.marks)


def resolve_outcomes(
    outcomes: Sequence[SpinOutcome],
    board: Board,
    marked: AbstractSet[Position],
) -> SpinResolution:
    """Map a spin's column outcomes onto board cells.

    Matching is column-scoped: a number only marks cells in its own column, and a
    blocker only suppresses its own column. Wilds never mark directly; they are
    returned as pending requests.
    """
    if len(outcomes) != board.cols:
        raise ValueError(f"Expected {board.cols} outcomes, got {len(outcomes)}")
    resolution = SpinResolution()
    resolution.blocker_columns = [
        col for col, outcome in enumerate(outcomes) if outcome.kind is OutcomeKind.BLOCKER
    ]
    blocked = set(resolution.blocker_columns)
    for col, outcome in enumerate(outcomes):
        if outcome.kind is OutcomeKind.BLOCKER:
            continue
        if outcome.kind is OutcomeKind.BONUS:
            resolution.bonus_columns.append(col)
        elif outcome.kind is OutcomeKind.SUPER_WILD:
            resolution.pending_super_wild = True
        elif outcome.kind is OutcomeKind.WILD:
            resolution.pending_wild_columns.append(col)
        elif col not in blocked:
            # Columns hold distinct values, but scan every row regardless.
            for row in range(board.rows):
                if board.number_at(row, col) == outcome.number and (row, col) not in marked:
                    resolution.marks.append((row, col))
    resolution.marks.sort(key=lambda cell: cell[1])
    return resolution
