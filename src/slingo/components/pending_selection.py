from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class PendingSelection:
    """Deferred player choices granted by wild symbols.

    wild_columns: columns waiting for the player to pick one unmarked cell.
    super_wild: True while a grid-wide pick is outstanding.
    """
    wild_columns: List[int] = field(default_factory=list)
    super_wild: bool = False

    def has_pending(self) -> bool:
        return bool(self.wild_columns) or self.super_wild

    def clear(self) -> None:
        self.wild_columns.clear()
        self.super_wild = False
