from dataclasses import dataclass

from slingo.constants import BONUS_COLLECTOR_SLOTS


@dataclass(slots=True)
class BonusCollector:
    """Finite row of collector slots filled left to right by bonus symbols."""
    capacity: int = BONUS_COLLECTOR_SLOTS
    filled: int = 0

    @property
    def is_full(self) -> bool:
        return self.filled >= self.capacity

    def fill_next(self) -> int | None:
        """Fill the first free slot and return its index, or None when full."""
        if self.is_full:
            return None
        slot = self.filled
        self.filled += 1
        return slot
