from __future__ import annotations

import logging
from typing import Mapping

from slingo.constants import HIT_RATES, MIN_TARGET

logger = logging.getLogger(__name__)


def compute_target(game_counter: int, hit_rates: Mapping[int, int] = HIT_RATES) -> int:
    """Return how many lines the game with this counter should deliver.

    Counts are tried from highest to lowest; the first whose divisor divides the
    counter wins, so ties resolve toward the largest count. Every game gets at
    least MIN_TARGET.
    """
    if isinstance(game_counter, bool) or not isinstance(game_counter, int):
        raise ValueError(f"Game counter must be an int, got {game_counter!r}")
    if game_counter < 1:
        raise ValueError(f"Game counter must be >= 1, got {game_counter}")
    target = MIN_TARGET
    for count in sorted(hit_rates, reverse=True):
        if count <= MIN_TARGET:
            continue
        if game_counter % hit_rates[count] == 0:
            target = count
            break
    logger.debug("Game %d: target slingos = %d", game_counter, target)
    return target
