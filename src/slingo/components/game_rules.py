from dataclasses import dataclass, field
from typing import Dict

from slingo import constants


@dataclass(frozen=True, slots=True)
class GameRules:
    """Tunable rules shared by outcome generation, targeting and scoring.

    Defaults mirror slingo.constants; tests override probabilities to make spins
    deterministic.
    """
    spins_per_game: int = constants.SPINS_PER_GAME
    blocker_chance: float = constants.BLOCKER_CHANCE
    super_wild_chance: float = constants.SUPER_WILD_CHANCE
    bonus_chance: float = constants.BONUS_CHANCE
    wild_chance: float = constants.WILD_CHANCE
    max_wilds: int = constants.MAX_WILDS_PER_GAME
    bias_cap: float = constants.BIAS_CAP
    hit_rates: Dict[int, int] = field(default_factory=lambda: dict(constants.HIT_RATES))
    line_points: int = constants.LINE_POINTS
    marked_cell_points: int = constants.MARKED_CELL_POINTS
    full_house_bonus: int = constants.FULL_HOUSE_BONUS
    almost_complete_max_unmarked: int = constants.ALMOST_COMPLETE_MAX_UNMARKED
