"""Game session resource describing spins, score and lifecycle phase."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List

from slingo.components.spin_outcome import SpinOutcome
from slingo.constants import MIN_TARGET, SPINS_PER_GAME


class SessionPhase(Enum):
    """Lifecycle of a single game."""
    ACTIVE = auto()
    FORCED_COMPLETION = auto()
    TERMINAL = auto()


@dataclass(slots=True)
class GameSession:
    """Singleton component storing per-game progress."""
    game_counter: int = 1
    target_slingo_count: int = MIN_TARGET
    spins_remaining: int = SPINS_PER_GAME
    score: int = 0
    slingo_count: int = 0
    game_active: bool = True
    phase: SessionPhase = SessionPhase.ACTIVE
    full_house: bool = False
    status_message: str = ""
    last_outcomes: List[SpinOutcome] = field(default_factory=list)

    @property
    def target_met(self) -> bool:
        return self.slingo_count >= self.target_slingo_count
