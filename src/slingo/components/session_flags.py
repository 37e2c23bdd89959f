from dataclasses import dataclass


@dataclass(slots=True)
class SessionFlags:
    """Single-use special symbol bookkeeping for one game.

    Blocker, super wild and bonus may each appear once per game; wilds are counted.
    """
    blocker_used: bool = False
    super_wild_used: bool = False
    bonus_used: bool = False
    wild_used_count: int = 0
